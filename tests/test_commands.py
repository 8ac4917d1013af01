from models import User, Listing


def test_init_db_creates_tables(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=['init-db', '--drop'])

    assert result.exit_code == 0
    assert "ready" in result.output
    assert User.query.count() == 0


def test_seed_demo_is_idempotent(app):
    runner = app.test_cli_runner()

    first = runner.invoke(args=['seed-demo'])
    second = runner.invoke(args=['seed-demo'])

    assert first.exit_code == 0
    assert "created" in first.output
    assert "Skipping" in second.output
    assert User.query.count() == 2
    assert Listing.query.filter_by(status='available').count() == 1


def test_seeded_donor_can_log_in(app, client):
    app.test_cli_runner().invoke(args=['seed-demo'])

    response = client.post('/auth/login', json={
        "email": "donor@foodbridge.demo", "password": "password123"
    })
    assert response.status_code == 200


def test_health(client):
    response = client.get('/')
    assert response.status_code == 200
    assert "running" in response.get_json()['message']


def test_unknown_route_returns_json(client):
    response = client.get('/does-not-exist')
    assert response.status_code == 404
    assert response.get_json()['success'] is False
