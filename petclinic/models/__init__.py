from petclinic.models.user_model import User, Role
from petclinic.models.pet_model import Pet
from petclinic.models.appointment_model import Appointment
from petclinic.models.medical_record_model import MedicalRecord

__all__ = ['User', 'Role', 'Pet', 'Appointment', 'MedicalRecord']
