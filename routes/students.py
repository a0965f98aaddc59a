"""
Student routes (owner-scoped)
"""
from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from models import db
from models.student import Student
from utils.dates import parse_date
from utils.errors import ValidationError
from utils.records import get_owned, list_owned
from utils.validators import get_json_body, normalize_email, require_fields, validate_email

students_bp = Blueprint('students', __name__, url_prefix='/api')


def _student_values(data):
    """Validated column values from a request body."""
    require_fields(data, 'first_name', 'last_name')
    if data.get('email') is not None and not isinstance(data['email'], str):
        raise ValidationError("Please provide a valid email address.")
    email = normalize_email(data.get('email')) or None
    if email and not validate_email(email):
        raise ValidationError("Please provide a valid email address.")
    return {
        'first_name': str(data['first_name']).strip(),
        'last_name': str(data['last_name']).strip(),
        'dob': parse_date(data.get('dob'), 'dob'),
        'gender': data.get('gender'),
        'email': email,
        'phone': data.get('phone'),
        'address': data.get('address'),
    }


@students_bp.route('/students', methods=['GET'])
@login_required
def list_students():
    students = list_owned(Student, current_user.id)
    return jsonify({"success": True, "students": [s.to_dict() for s in students]})


@students_bp.route('/students', methods=['POST'])
@login_required
def add_student():
    student = Student(owner_id=current_user.id, **_student_values(get_json_body(request)))
    db.session.add(student)
    db.session.commit()
    return jsonify({"success": True, "message": "Student added", "student": student.to_dict()}), 201


@students_bp.route('/students/<int:student_id>', methods=['PUT'])
@login_required
def update_student(student_id):
    student = get_owned(Student, student_id, current_user.id)
    for key, value in _student_values(get_json_body(request)).items():
        setattr(student, key, value)
    db.session.commit()
    return jsonify({"success": True, "message": "Student updated", "student": student.to_dict()})


@students_bp.route('/students/<int:student_id>', methods=['DELETE'])
@login_required
def delete_student(student_id):
    """Delete a student with their enrollments and marks"""
    student = get_owned(Student, student_id, current_user.id)
    db.session.delete(student)
    db.session.commit()
    return jsonify({"success": True, "message": "Student deleted"})
