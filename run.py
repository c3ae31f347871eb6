# run.py
import logging
from petclinic import create_app

app = create_app()
logging.basicConfig(
    level=app.config['LOG_LEVEL'],
    format='[%(levelname)s] %(asctime)s - %(name)s - %(message)s'
)

if __name__ == '__main__':
    app.logger.info('Pet Clinic Management System starting...')
    app.run(host=app.config['SERVER_HOST'], port=app.config['SERVER_PORT'])
