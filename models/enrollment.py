"""
Enrollment model definition
"""
from models import db
from utils.dates import today, format_date


class Enrollment(db.Model):
    """A student taking a course"""
    __tablename__ = 'enrollments'

    id = db.Column(db.Integer, primary_key=True)
    owner_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    student_id = db.Column(db.Integer, db.ForeignKey('students.id', ondelete='CASCADE'), nullable=False, index=True)
    course_id = db.Column(db.Integer, db.ForeignKey('courses.id', ondelete='CASCADE'), nullable=False, index=True)
    enrollment_date = db.Column(db.Date, nullable=False, default=today)

    def to_dict(self):
        return {
            'id': self.id,
            'student_id': self.student_id,
            'course_id': self.course_id,
            'first_name': self.student.first_name if self.student else None,
            'last_name': self.student.last_name if self.student else None,
            'course_name': self.course.course_name if self.course else None,
            'enrollment_date': format_date(self.enrollment_date),
        }

    def __repr__(self):
        return f'<Enrollment {self.student_id}->{self.course_id}>'
