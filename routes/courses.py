"""
Course routes (owner-scoped)
"""
from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from models import db
from models.course import Course
from utils.records import get_owned, list_owned
from utils.validators import get_json_body, require_fields

courses_bp = Blueprint('courses', __name__, url_prefix='/api')


@courses_bp.route('/courses', methods=['GET'])
@login_required
def list_courses():
    courses = list_owned(Course, current_user.id)
    return jsonify({"success": True, "courses": [c.to_dict() for c in courses]})


@courses_bp.route('/courses', methods=['POST'])
@login_required
def add_course():
    data = get_json_body(request)
    require_fields(data, 'course_name', 'course_code')
    course = Course(
        owner_id=current_user.id,
        course_name=str(data['course_name']).strip(),
        course_code=str(data['course_code']).strip(),
        course_description=data.get('course_description'),
    )
    db.session.add(course)
    db.session.commit()
    return jsonify({"success": True, "message": "Course added", "course": course.to_dict()}), 201


@courses_bp.route('/courses/<int:course_id>', methods=['DELETE'])
@login_required
def delete_course(course_id):
    """Delete a course with its enrollments and marks"""
    course = get_owned(Course, course_id, current_user.id)
    db.session.delete(course)
    db.session.commit()
    return jsonify({"success": True, "message": "Course deleted"})
