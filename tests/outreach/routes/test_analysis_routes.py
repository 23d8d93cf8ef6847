"""Tests for outreach.routes.analysis."""
from unittest.mock import patch

import pytest


FIXED = {
    'overall_score': 60, 'issues': [{'description': 'Weak branding.'}], 'suggestions': [],
    'images_analyzed': 0, 'need_decision': 'yes', 'confidence_score': 0.8, 'rationale': 'r',
}


@pytest.fixture
def analyst(make_user, login_as):
    return login_as(make_user(role='analyst'))


class TestAnalyze:

    def test_analyze_page(self, client, analyst):
        with patch('outreach.services.pages.score_page', return_value=FIXED):
            resp = client.post('/api/analyses', json={'url': 'https://facebook.com/corner-cafe'})
        assert resp.status_code == 201
        assert resp.json['page']['name'] == 'Corner Cafe'
        assert resp.json['analysis']['overall_score'] == 60

    def test_missing_url(self, client, analyst):
        resp = client.post('/api/analyses', json={})
        assert resp.status_code == 400
        assert resp.json == {'error': 'Please enter a Facebook Page URL'}

    def test_non_string_url_is_400(self, client, analyst):
        resp = client.post('/api/analyses', json={'url': 123, 'name': ['x']})
        assert resp.status_code == 400
        assert resp.json == {'error': 'Please enter a Facebook Page URL'}

    def test_scoring_failure_is_502(self, client, analyst):
        from outreach.errors import UpstreamError
        with patch('outreach.services.pages.score_page', side_effect=UpstreamError('Function Error: down')):
            resp = client.post('/api/analyses', json={'url': 'https://facebook.com/x'})
        assert resp.status_code == 502
        assert resp.json['error'] == 'Function Error: down'

    def test_open_circuit_is_503(self, client, analyst):
        from outreach.services.circuit_breaker import CircuitOpenError
        with patch('outreach.services.pages.score_page', side_effect=CircuitOpenError('analyzer', 30)):
            resp = client.post('/api/analyses', json={'url': 'https://facebook.com/x'})
        assert resp.status_code == 503
        assert resp.json['service'] == 'analyzer'


class TestHistoryRoutes:

    def test_history_detail_delete(self, client, analyst, make_analysis):
        analysis = make_analysis(analyst, name='Mine')
        analysis_id = analysis.id

        history = client.get('/api/analyses').json
        assert [h['id'] for h in history] == [analysis_id]

        detail = client.get(f'/api/analyses/{analysis_id}').json
        assert detail['pages']['name'] == 'Mine'

        assert client.delete(f'/api/analyses/{analysis_id}').status_code == 200
        assert client.get(f'/api/analyses/{analysis_id}').status_code == 404

    def test_ready_and_generate(self, client, analyst, make_analysis):
        analysis = make_analysis(analyst, score=70)
        analysis_id = analysis.id
        assert [a['id'] for a in client.get('/api/analyses/ready').json] == [analysis_id]

        resp = client.post(f'/api/analyses/{analysis_id}/proposal')
        assert resp.status_code == 201
        assert resp.json['status'] == 'pending'
        assert client.get('/api/analyses/ready').json == []

        again = client.post(f'/api/analyses/{analysis_id}/proposal')
        assert again.status_code == 400
