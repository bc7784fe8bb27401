import pytest

from ielts_mock.app import app as flask_app


@pytest.fixture
def client():
    flask_app.config.update(TESTING=True, ANALYSIS_DELAY_SECONDS=0)
    with flask_app.test_client() as client:
        yield client


def test_healthcheck(client):
    response = client.get('/healthz')

    assert response.status_code == 200
    assert response.get_json() == {'status': 'ok'}


@pytest.mark.parametrize("task_type, time_limit", [("task1", 1200), ("TASK2", 2400)])
def test_random_question(client, task_type, time_limit):
    response = client.get(f'/api/questions/{task_type}')
    data = response.get_json()

    assert response.status_code == 200
    assert data['success'] is True
    assert data['task_type'] == task_type.lower()
    assert data['question']['time_limit_seconds'] == time_limit
    assert data['question']['prompt']


def test_random_question_rejects_unknown_task(client):
    response = client.get('/api/questions/task9')

    assert response.status_code == 400
    assert 'error' in response.get_json()


def test_sample_questions(client):
    response = client.get('/api/questions/task1/samples')

    assert response.status_code == 200
    assert len(response.get_json()['questions']) == 3


@pytest.mark.parametrize("payload", [
    {'task_type': 'task1', 'response': '   '},
    {'task_type': 'task1'},
    {},
])
def test_feedback_without_response_is_rejected(client, payload):
    response = client.post('/api/feedback', json=payload)
    data = response.get_json()

    assert response.status_code == 400
    assert data['no_response'] is True
    assert data['error']


def test_feedback_returns_scores_and_improved_version(client):
    essay = (
        "The chart shows the number of tourists visiting three countries between 2000 and 2020.\n\n"
        "Overall, visitor numbers rose in every country, although the pace of growth differed."
    )

    response = client.post('/api/feedback', json={'task_type': 'Task1', 'response': essay})
    data = response.get_json()

    assert response.status_code == 200
    assert data['success'] is True
    assert data['task_type'] == 'task1'
    feedback = data['feedback']
    for key in ('task_achievement', 'coherence_and_cohesion', 'lexical_resource', 'grammatical_range_and_accuracy'):
        assert 4.0 <= feedback[key]['score'] <= 9.0
        assert feedback[key]['feedback']
    assert 4.0 <= feedback['overall_score'] <= 9.0
    assert feedback['improved_version']


def test_unknown_route_returns_json_404(client):
    response = client.get('/api/does-not-exist')

    assert response.status_code == 404
    assert response.get_json() == {'error': 'Not found'}


@pytest.mark.parametrize("payload", [
    {'task_type': 'task1', 'response': 123},
    {'task_type': 'task1', 'response': ['an', 'essay']},
    {'task_type': 5, 'response': 'A short essay about charts.'},
    ['not', 'an', 'object'],
    'just a string',
])
def test_feedback_with_malformed_payload_is_rejected(client, payload):
    response = client.post('/api/feedback', json=payload)
    data = response.get_json()

    assert response.status_code == 400
    assert data['no_response'] is True
    assert data['error']


def test_feedback_keys_keep_declaration_order(client):
    essay = "Prices rose.\n\nThen they fell again across every region in the survey."

    response = client.post('/api/feedback', json={'task_type': 'task2', 'response': essay})

    assert list(response.get_json()['feedback']) == [
        'task_achievement',
        'coherence_and_cohesion',
        'lexical_resource',
        'grammatical_range_and_accuracy',
        'overall_score',
        'overall_feedback',
        'improved_version',
    ]
