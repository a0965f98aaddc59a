"""
Enrollment routes (owner-scoped)
"""
from flask import Blueprint, current_app, jsonify, request
from flask_login import current_user, login_required

from models import db
from models.course import Course
from models.enrollment import Enrollment
from models.student import Student
from utils.dates import parse_date, today
from utils.errors import ValidationError
from utils.records import find_owned, get_owned, list_owned
from utils.validators import get_json_body, parse_int, require_fields

enrollments_bp = Blueprint('enrollments', __name__, url_prefix='/api')


@enrollments_bp.route('/enrollments', methods=['GET'])
@login_required
def list_enrollments():
    enrollments = list_owned(Enrollment, current_user.id)
    return jsonify({"success": True, "enrollments": [e.to_dict() for e in enrollments]})


@enrollments_bp.route('/enrollments', methods=['POST'])
@login_required
def enroll_student():
    data = get_json_body(request)
    require_fields(data, 'student_id', 'course_id')

    student = find_owned(Student, parse_int(data['student_id'], 'student_id'), current_user.id)
    if student is None:
        raise ValidationError("Invalid student_id")
    course = find_owned(Course, parse_int(data['course_id'], 'course_id'), current_user.id)
    if course is None:
        raise ValidationError("Invalid course_id")

    enrollment = Enrollment(
        owner_id=current_user.id,
        student=student,
        course=course,
        enrollment_date=parse_date(data.get('enrollment_date'), 'enrollment_date') or today(),
    )
    db.session.add(enrollment)
    db.session.commit()
    current_app.logger.info("Enrolled student %s in course %s", student.id, course.id)
    return jsonify({"success": True, "message": "Student enrolled", "enrollment": enrollment.to_dict()}), 201


@enrollments_bp.route('/enrollments/<int:enrollment_id>', methods=['DELETE'])
@login_required
def delete_enrollment(enrollment_id):
    enrollment = get_owned(Enrollment, enrollment_id, current_user.id)
    db.session.delete(enrollment)
    db.session.commit()
    return jsonify({"success": True, "message": "Enrollment deleted"})
