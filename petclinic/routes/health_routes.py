from flask import Blueprint

bp = Blueprint('health', __name__, url_prefix='/api')


@bp.route('/health', methods=['GET'])
def health():
    return {'status': 'healthy', 'service': 'Pet Clinic API'}, 200
