"""
Student model definition
"""
from models import db
from utils.dates import utcnow, format_date


class Student(db.Model):
    """Student record, scoped to the account that created it"""
    __tablename__ = 'students'

    id = db.Column(db.Integer, primary_key=True)
    owner_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    dob = db.Column(db.Date, nullable=True)
    gender = db.Column(db.String(20))
    email = db.Column(db.String(120))
    phone = db.Column(db.String(20))
    address = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=utcnow)

    # Relationships
    enrollments = db.relationship('Enrollment', backref='student', lazy=True,
                                  cascade='all, delete')
    marks = db.relationship('Mark', backref='student', lazy=True,
                            cascade='all, delete')

    @property
    def full_name(self):
        return f'{self.first_name} {self.last_name}'.strip()

    def to_dict(self):
        return {
            'id': self.id,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'dob': format_date(self.dob),
            'gender': self.gender,
            'email': self.email,
            'phone': self.phone,
            'address': self.address,
        }

    def __repr__(self):
        return f'<Student {self.full_name}>'
