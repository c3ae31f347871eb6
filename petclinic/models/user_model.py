import enum
from datetime import datetime
from petclinic import db


class Role(enum.Enum):
    OWNER = 'owner'
    STAFF = 'staff'


class User(db.Model):
    __tablename__ = 'owners'
    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    name = db.Column(db.String(100), nullable=False)
    contact = db.Column(db.String(20))
    email = db.Column(db.String(100), unique=True, nullable=False)
    password = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), nullable=False, default=Role.OWNER.value, server_default=Role.OWNER.value)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    pets = db.relationship('Pet', backref='owner', lazy=True, passive_deletes=True)

    def __repr__(self):
        return f'<User {self.email} ({self.role})>'
