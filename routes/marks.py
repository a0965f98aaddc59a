"""
Marks routes (owner-scoped)
"""
from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from models import db
from models.course import Course
from models.mark import Mark
from models.student import Student
from utils.errors import ValidationError
from utils.records import find_owned, get_owned, list_owned
from utils.validators import get_json_body, parse_int, require_fields

marks_bp = Blueprint('marks', __name__, url_prefix='/api')

MAX_MARKS = 100


def _mark_values(data):
    require_fields(data, 'student_id', 'course_id', 'marks', 'semester')

    student = find_owned(Student, parse_int(data['student_id'], 'student_id'), current_user.id)
    if student is None:
        raise ValidationError("Invalid student_id")
    course = find_owned(Course, parse_int(data['course_id'], 'course_id'), current_user.id)
    if course is None:
        raise ValidationError("Invalid course_id")

    try:
        marks = float(data['marks'])
    except (TypeError, ValueError):
        raise ValidationError("marks must be a number")
    if not 0 <= marks <= MAX_MARKS:
        raise ValidationError(f"marks must be between 0 and {MAX_MARKS}")

    return {
        'student': student,
        'course': course,
        'marks': marks,
        'semester': str(data['semester']).strip(),
    }


@marks_bp.route('/marks', methods=['GET'])
@login_required
def list_marks():
    marks = list_owned(Mark, current_user.id)
    return jsonify({"success": True, "marks": [m.to_dict() for m in marks]})


@marks_bp.route('/marks', methods=['POST'])
@login_required
def add_marks():
    mark = Mark(owner_id=current_user.id, **_mark_values(get_json_body(request)))
    db.session.add(mark)
    db.session.commit()
    return jsonify({"success": True, "message": "Marks added", "mark": mark.to_dict()}), 201


@marks_bp.route('/marks/<int:mark_id>', methods=['PUT'])
@login_required
def update_marks(mark_id):
    mark = get_owned(Mark, mark_id, current_user.id, label="Marks")
    for key, value in _mark_values(get_json_body(request)).items():
        setattr(mark, key, value)
    db.session.commit()
    return jsonify({"success": True, "message": "Marks updated", "mark": mark.to_dict()})


@marks_bp.route('/marks/<int:mark_id>', methods=['DELETE'])
@login_required
def delete_marks(mark_id):
    mark = get_owned(Mark, mark_id, current_user.id, label="Marks")
    db.session.delete(mark)
    db.session.commit()
    return jsonify({"success": True, "message": "Marks deleted"})
