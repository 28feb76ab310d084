"""
Integration tests for service endpoints and error handling.
"""


class TestServiceEndpoints:

    def test_root_liveness(self, client):
        response = client.get('/')

        assert response.status_code == 200
        assert response.get_json() == {'message': 'Rand Cash & Carry API is running'}

    def test_health_reports_collection_sizes(self, client, customer):
        body = client.get('/health').get_json()

        assert body['status'] == 'healthy'
        assert body['products'] == 2
        assert body['users'] == 1
        assert body['orders'] == 0

    def test_metrics_exposition(self, client):
        client.get('/products')

        response = client.get('/metrics')

        assert response.status_code == 200
        assert b'cashcarry_http_requests_total' in response.data


class TestErrorHandling:

    def test_unknown_route_is_json_404(self, client):
        response = client.get('/nope')

        assert response.status_code == 404
        assert response.get_json()['status'] == 'error'

    def test_wrong_method_is_json_405(self, client):
        response = client.delete('/products')

        assert response.status_code == 405

    def test_corrupt_data_files_start_empty(self, data_dir):
        from config import TestConfig
        from cashcarry import create_app

        (data_dir / 'products.json').write_text('not json', encoding='utf-8')
        app = create_app(TestConfig, overrides={
            'PRODUCTS_FILE': str(data_dir / 'products.json'),
            'USERS_FILE': str(data_dir / 'users.json'),
            'ORDERS_FILE': str(data_dir / 'orders.json'),
        })

        assert app.test_client().get('/products').get_json() == []
