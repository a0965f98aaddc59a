"""
Models package for the student records application
"""
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

# Import all models here to ensure they're registered
from models.user import User
from models.otp import UserOtp
from models.student import Student
from models.course import Course
from models.enrollment import Enrollment
from models.mark import Mark

__all__ = [
    'db',
    'User',
    'UserOtp',
    'Student',
    'Course',
    'Enrollment',
    'Mark',
]
