"""
Tests for the converter, unit and activity HTTP endpoints.
"""

import json


class TestConvertEndpoints:

    def test_convert_yaml_to_json(self, client):
        response = client.post('/api/convert', json={
            'data': 'name: John\nage: 30',
            'input_format': 'yaml',
            'output_format': 'json'
        })
        assert response.status_code == 200
        data = response.get_json()
        assert data['success'] is True
        assert json.loads(data['result']) == {'name': 'John', 'age': 30}

    def test_convert_no_data(self, client):
        response = client.post('/api/convert', json={})
        assert response.status_code == 400
        assert response.get_json()['error'] == 'No data provided'

    def test_convert_missing_output_format(self, client):
        response = client.post('/api/convert', json={'data': '{}'})
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Output format is required'

    def test_convert_parse_error(self, client):
        response = client.post('/api/convert', json={
            'data': '{invalid',
            'input_format': 'json',
            'output_format': 'yaml'
        })
        assert response.status_code == 400
        data = response.get_json()
        assert data['success'] is False
        assert data['error_type'] == 'ParseError'

    def test_convert_self_referencing_yaml(self, client):
        response = client.post('/api/convert', json={
            'data': 'a: &x [*x]',
            'input_format': 'yaml',
            'output_format': 'json'
        })
        assert response.status_code == 400
        assert response.get_json()['error_type'] == 'ParseError'

    def test_convert_records_usage_and_history(self, client, activity_store):
        client.post('/api/convert', json={
            'data': '{"a": 1}',
            'input_format': 'json',
            'output_format': 'yaml',
            'user_id': 'user-1'
        })
        history = activity_store.get_history('user-1')
        assert history[0]['tool_id'] == 'json-converter'
        assert history[0]['input_preview'] == 'JSON → YAML'
        assert activity_store.get_analytics()[0]['usage_count'] == 1

    def test_failed_convert_not_recorded(self, client, activity_store):
        client.post('/api/convert', json={
            'data': '{invalid',
            'input_format': 'json',
            'output_format': 'yaml',
            'user_id': 'user-1'
        })
        assert activity_store.get_history('user-1') == []
        assert activity_store.get_analytics() == []

    def test_validate(self, client):
        response = client.post('/api/validate', json={'data': '<a><b></a>', 'format': 'xml'})
        assert response.status_code == 200
        assert response.get_json()['valid'] is False

    def test_detect_format(self, client):
        response = client.post('/api/detect-format', json={'data': '<root/>'})
        assert response.get_json() == {'format': 'xml', 'success': True}


class TestUnitEndpoints:

    def test_list_categories(self, client):
        response = client.get('/api/units')
        assert response.status_code == 200
        categories = [entry['category'] for entry in response.get_json()['categories']]
        assert categories == ['length', 'weight', 'temperature', 'speed', 'storage']

    def test_category_units(self, client):
        response = client.get('/api/units/temperature')
        assert response.status_code == 200
        assert response.get_json()['units'] == ['Celsius', 'Fahrenheit', 'Kelvin']

    def test_unknown_category_units(self, client):
        response = client.get('/api/units/volume')
        assert response.status_code == 404

    def test_convert_units(self, client):
        response = client.post('/api/units/convert', json={
            'category': 'length',
            'value': '1',
            'from_unit': 'Meters',
            'to_unit': 'Feet'
        })
        assert response.status_code == 200
        data = response.get_json()
        assert data['success'] is True
        assert data['formatted'] == '3.280840'

    def test_convert_units_temperature(self, client):
        response = client.post('/api/units/convert', json={
            'category': 'temperature',
            'value': 100,
            'from_unit': 'Celsius',
            'to_unit': 'Fahrenheit'
        })
        assert response.get_json()['result'] == 212

    def test_convert_units_missing_fields(self, client):
        response = client.post('/api/units/convert', json={'category': 'length', 'value': 1})
        assert response.status_code == 400
        assert 'from_unit' in response.get_json()['error']

    def test_convert_units_invalid_value(self, client):
        response = client.post('/api/units/convert', json={
            'category': 'length',
            'value': 'abc',
            'from_unit': 'Meters',
            'to_unit': 'Feet'
        })
        assert response.status_code == 400
        assert response.get_json()['error_type'] == 'ValidationError'

    def test_convert_units_integer_too_large(self, client):
        response = client.post('/api/units/convert', json={
            'category': 'length',
            'value': 10 ** 400,
            'from_unit': 'Meters',
            'to_unit': 'Feet'
        })
        assert response.status_code == 400
        assert response.get_json()['error_type'] == 'ValidationError'

    def test_convert_units_wrong_category_unit(self, client):
        response = client.post('/api/units/convert', json={
            'category': 'length',
            'value': 1,
            'from_unit': 'Meters',
            'to_unit': 'Kelvin'
        })
        assert response.status_code == 400
        assert response.get_json()['error_type'] == 'UnknownUnitError'

    def test_convert_units_records_history(self, client, activity_store):
        client.post('/api/units/convert', json={
            'category': 'length',
            'value': '1',
            'from_unit': 'Meters',
            'to_unit': 'Feet',
            'user_id': 'user-1'
        })
        assert activity_store.get_history('user-1')[0]['input_preview'] == '1 Meters to Feet'

    def test_zero_value_counts_usage_without_history(self, client, activity_store):
        client.post('/api/units/convert', json={
            'category': 'length',
            'value': 0,
            'from_unit': 'Meters',
            'to_unit': 'Feet',
            'user_id': 'user-1'
        })
        assert activity_store.get_history('user-1') == []
        assert activity_store.get_analytics()[0]['tool_id'] == 'unit-converter'


class TestActivityEndpoints:

    def test_add_and_get_history(self, client):
        response = client.post('/api/users/user-1/history', json={
            'tool_id': 'unit-converter',
            'input_preview': '5 Feet to Meters'
        })
        assert response.status_code == 200
        assert response.get_json()['success'] is True

        response = client.get('/api/users/user-1/history')
        data = response.get_json()
        assert data['count'] == 1
        assert data['history'][0]['input_preview'] == '5 Feet to Meters'

    def test_get_history_limit_above_default(self, client):
        for _ in range(25):
            client.post('/api/users/user-1/history', json={'tool_id': 'unit-converter'})
        assert client.get('/api/users/user-1/history').get_json()['count'] == 20
        assert client.get('/api/users/user-1/history?limit=50').get_json()['count'] == 25

    def test_add_history_unknown_tool(self, client):
        response = client.post('/api/users/user-1/history', json={'tool_id': 'nope'})
        assert response.status_code == 404

    def test_add_history_missing_tool(self, client):
        response = client.post('/api/users/user-1/history', json={})
        assert response.status_code == 400

    def test_invalid_user_id(self, client):
        response = client.get('/api/users/bad%20user/history')
        assert response.status_code == 400

    def test_clear_history(self, client):
        client.post('/api/users/user-1/history', json={'tool_id': 'unit-converter'})
        response = client.delete('/api/users/user-1/history')
        assert response.get_json()['success'] is True
        assert client.get('/api/users/user-1/history').get_json()['count'] == 0

    def test_toggle_favorite(self, client):
        response = client.post('/api/users/user-1/favorites/json-converter')
        assert response.get_json()['favorite'] is True
        assert client.get('/api/users/user-1/favorites').get_json()['favorites'] == ['json-converter']

        response = client.post('/api/users/user-1/favorites/json-converter')
        assert response.get_json()['favorite'] is False

    def test_favorite_unknown_tool(self, client):
        response = client.post('/api/users/user-1/favorites/nope')
        assert response.status_code == 404

    def test_analytics(self, client):
        client.post('/api/units/convert', json={
            'category': 'storage', 'value': 1, 'from_unit': 'Kilobytes', 'to_unit': 'Bytes'
        })
        analytics = client.get('/api/analytics').get_json()['analytics']
        assert analytics[0]['tool_id'] == 'unit-converter'
        assert analytics[0]['usage_count'] == 1
