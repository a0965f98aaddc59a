"""
Routes package for the student records application
"""
# Export blueprints for registration in app.py
from routes.public import public_bp
from routes.auth import auth_bp
from routes.students import students_bp
from routes.courses import courses_bp
from routes.enrollments import enrollments_bp
from routes.marks import marks_bp

__all__ = [
    'public_bp',
    'auth_bp',
    'students_bp',
    'courses_bp',
    'enrollments_bp',
    'marks_bp',
]
