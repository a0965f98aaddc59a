"""
User model definition
"""
from flask_login import UserMixin
from models import db
from utils.auth_utils import verify_password
from utils.dates import utcnow


class User(UserMixin, db.Model):
    """Account that owns a set of student records"""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)

    # Relationships
    otps = db.relationship('UserOtp', backref='user', lazy=True,
                           cascade='all, delete')
    students = db.relationship('Student', backref='owner', lazy=True,
                               cascade='all, delete')
    courses = db.relationship('Course', backref='owner', lazy=True,
                              cascade='all, delete')

    def check_password(self, password):
        """Check if password matches"""
        return verify_password(self.password_hash, password)

    def to_dict(self):
        return {'id': self.id, 'username': self.username, 'email': self.email}

    def __repr__(self):
        return f'<User {self.email}>'
