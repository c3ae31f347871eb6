from datetime import datetime
from petclinic import db


class Pet(db.Model):
    __tablename__ = 'pets'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    species = db.Column(db.String(50), nullable=False)
    breed = db.Column(db.String(50))
    owner_id = db.Column(db.Integer, db.ForeignKey('owners.id', ondelete='CASCADE'), nullable=False, index=True)
    medical_history = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    appointments = db.relationship('Appointment', backref='pet', lazy=True, passive_deletes=True)
    medical_records = db.relationship('MedicalRecord', backref='pet', lazy=True, passive_deletes=True)

    def __repr__(self):
        return f'<Pet {self.name} ({self.species})>'
