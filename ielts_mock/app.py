"""
IELTS Mock Writing - Flask Application
JSON API for generating writing prompts and scoring submitted responses.
"""
import os

from flask import Flask, jsonify, request, current_app
from flask_cors import CORS

from .config import config
from .models import InvalidSubmissionError, normalize_task_type
from .services.feedback_service import generate_feedback, validate_submission
from .services.question_generator import get_all_questions, get_random_question


# Initialize Flask app
app = Flask(__name__)
app.config.from_object(config[os.getenv('FLASK_ENV', 'development')])
app.json.sort_keys = False

# Initialize extensions
CORS(app, resources={r"/*": {"origins": app.config['CORS_ALLOWED_ORIGINS']}})


# ============================================================================
# QUESTION ROUTES
# ============================================================================

@app.route('/api/questions/<task_type>')
def random_question(task_type):
    """Generate a new writing prompt for the requested task."""
    try:
        normalized = normalize_task_type(task_type)
    except InvalidSubmissionError as e:
        return jsonify({'error': str(e)}), 400

    question = get_random_question(normalized)
    return jsonify({
        'success': True,
        'task_type': normalized,
        'question': question.to_dict()
    })


@app.route('/api/questions/<task_type>/samples')
def sample_questions(task_type):
    """List the built-in sample prompts for a task."""
    try:
        questions = get_all_questions(task_type)
    except InvalidSubmissionError as e:
        return jsonify({'error': str(e)}), 400

    return jsonify({
        'success': True,
        'questions': [question.to_dict() for question in questions]
    })


# ============================================================================
# FEEDBACK ROUTES
# ============================================================================

@app.route('/api/feedback', methods=['POST'])
def submit_response():
    """Score a response and return criterion feedback plus an improved version."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    task_type = data.get('task_type')
    response_text = data.get('response')

    try:
        task_type, response_text = validate_submission(task_type, response_text)
    except InvalidSubmissionError as e:
        return jsonify({'error': str(e), 'no_response': True}), 400

    current_app.logger.info(
        f"Generating feedback for task_type={task_type}, word_count={len(response_text.split())}"
    )
    feedback = generate_feedback(task_type, response_text)

    return jsonify({
        'success': True,
        'task_type': task_type,
        'feedback': feedback.to_dict()
    })


# ============================================================================
# HEALTH CHECK
# ============================================================================

@app.route('/healthz')
def healthcheck():
    """Health check endpoint."""
    return jsonify({'status': 'ok'})


# ============================================================================
# ERROR HANDLERS
# ============================================================================

@app.errorhandler(404)
def not_found(error):
    """404 error handler."""
    return jsonify({'error': 'Not found'}), 404


@app.errorhandler(500)
def internal_error(error):
    """500 error handler."""
    return jsonify({'error': 'Internal server error'}), 500


# ============================================================================
# INITIALIZATION
# ============================================================================

if __name__ == '__main__':
    app.run(host='0.0.0.0', port=int(os.getenv('PORT', 1111)), debug=app.config.get('DEBUG', False))
