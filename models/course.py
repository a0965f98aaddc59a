"""
Course model definition
"""
from models import db
from utils.dates import utcnow


class Course(db.Model):
    """Course offered by the account that created it"""
    __tablename__ = 'courses'

    id = db.Column(db.Integer, primary_key=True)
    owner_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    course_name = db.Column(db.String(150), nullable=False)
    course_code = db.Column(db.String(30), nullable=False)
    course_description = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=utcnow)

    # Relationships
    enrollments = db.relationship('Enrollment', backref='course', lazy=True,
                                  cascade='all, delete')
    marks = db.relationship('Mark', backref='course', lazy=True,
                            cascade='all, delete')

    def to_dict(self):
        return {
            'id': self.id,
            'course_name': self.course_name,
            'course_code': self.course_code,
            'course_description': self.course_description,
        }

    def __repr__(self):
        return f'<Course {self.course_code}>'
