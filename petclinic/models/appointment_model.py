from datetime import datetime
from petclinic import db


class Appointment(db.Model):
    __tablename__ = 'appointments'
    DEFAULT_STATUS = 'scheduled'

    id = db.Column(db.Integer, primary_key=True)
    pet_id = db.Column(db.Integer, db.ForeignKey('pets.id', ondelete='CASCADE'), nullable=False, index=True)
    date = db.Column(db.DateTime, nullable=False)
    reason = db.Column(db.Text)
    status = db.Column(db.String(20), nullable=False, default=DEFAULT_STATUS, server_default=DEFAULT_STATUS)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<Appointment {self.id} for Pet {self.pet_id}>'
