"""
Mark model definition
"""
from models import db


class Mark(db.Model):
    """Marks a student scored in a course for one semester"""
    __tablename__ = 'marks'

    id = db.Column(db.Integer, primary_key=True)
    owner_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    student_id = db.Column(db.Integer, db.ForeignKey('students.id', ondelete='CASCADE'), nullable=False, index=True)
    course_id = db.Column(db.Integer, db.ForeignKey('courses.id', ondelete='CASCADE'), nullable=False, index=True)
    marks = db.Column(db.Float, nullable=False)
    semester = db.Column(db.String(20), nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'student_id': self.student_id,
            'course_id': self.course_id,
            'marks': self.marks,
            'semester': self.semester,
            'first_name': self.student.first_name if self.student else None,
            'last_name': self.student.last_name if self.student else None,
            'course_name': self.course.course_name if self.course else None,
        }

    def __repr__(self):
        return f'<Mark {self.student_id} {self.course_id} {self.semester}>'
