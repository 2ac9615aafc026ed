"""
Unit tests for the CarbonRouteAgent Lambda handler.
"""

import json
import unittest
from unittest.mock import patch

from lambda_handler import lambda_handler


def make_event(body, as_string=True):
    return {'body': json.dumps(body) if as_string else body}


class TestLambdaHandler(unittest.TestCase):
    """Test suite for lambda_handler status codes and payloads."""

    def test_success_with_string_body(self):
        event = make_event({
            'origin': 'São Paulo, SP',
            'destination': 'Rio de Janeiro, RJ',
            'transport_mode': 'car'
        })
        response = lambda_handler(event, None)

        self.assertEqual(response['statusCode'], 200)
        self.assertEqual(response['headers']['Access-Control-Allow-Origin'], '*')
        body = json.loads(response['body'])
        self.assertTrue(body['success'])
        self.assertEqual(body['distance_km'], 430)
        self.assertEqual(body['distance_method'], 'db')
        self.assertEqual(body['emission_kg'], 51.6)

    def test_success_with_dict_body(self):
        event = make_event({'transport_mode': 'bus', 'distance_km': 100}, as_string=False)
        response = lambda_handler(event, None)

        self.assertEqual(response['statusCode'], 200)
        body = json.loads(response['body'])
        self.assertEqual(body['distance_method'], 'manual')
        self.assertEqual(body['emission_kg'], 8.9)

    def test_event_without_body(self):
        response = lambda_handler({'transport_mode': 'car', 'distance_km': 10}, None)
        self.assertEqual(response['statusCode'], 200)

    def test_missing_transport_mode(self):
        response = lambda_handler(make_event({'origin': 'Recife, PE', 'destination': 'Olinda, PE'}), None)
        self.assertEqual(response['statusCode'], 400)
        self.assertIn('transport_mode', json.loads(response['body'])['error'])

    def test_missing_locations(self):
        response = lambda_handler(make_event({'origin': 'Recife, PE', 'transport_mode': 'car'}), None)
        self.assertEqual(response['statusCode'], 400)

    def test_invalid_json(self):
        response = lambda_handler({'body': '{not json'}, None)
        self.assertEqual(response['statusCode'], 400)

    def test_non_object_body(self):
        response = lambda_handler({'body': '[1, 2]'}, None)
        self.assertEqual(response['statusCode'], 400)

    def test_unknown_transport_mode(self):
        event = make_event({'origin': 'Recife, PE', 'destination': 'Olinda, PE', 'transport_mode': 'rocket'})
        response = lambda_handler(event, None)
        self.assertEqual(response['statusCode'], 400)

    def test_invalid_manual_distance(self):
        response = lambda_handler(make_event({'transport_mode': 'car', 'distance_km': -3}), None)
        self.assertEqual(response['statusCode'], 400)

    def test_empty_manual_distance_without_locations(self):
        response = lambda_handler(make_event({'transport_mode': 'car', 'distance_km': ''}), None)
        self.assertEqual(response['statusCode'], 400)
        self.assertIn('origin and destination', json.loads(response['body'])['error'])

    def test_empty_manual_distance_with_locations(self):
        event = make_event({
            'origin': 'São Paulo, SP',
            'destination': 'Rio de Janeiro, RJ',
            'transport_mode': 'car',
            'distance_km': ''
        })
        response = lambda_handler(event, None)
        self.assertEqual(response['statusCode'], 200)
        self.assertEqual(json.loads(response['body'])['distance_method'], 'db')

    def test_huge_manual_distance(self):
        response = lambda_handler(make_event({'transport_mode': 'car', 'distance_km': 1e30}), None)

        self.assertEqual(response['statusCode'], 200)
        body = json.loads(response['body'])
        self.assertEqual(body['distance_km'], 1e30)
        self.assertAlmostEqual(body['emission_kg'] / 1.2e29, 1.0)

    def test_distance_unavailable(self):
        event = make_event({'origin': 'Atlantis, XX', 'destination': 'Recife, PE', 'transport_mode': 'car'})
        response = lambda_handler(event, None)

        self.assertEqual(response['statusCode'], 422)
        body = json.loads(response['body'])
        self.assertEqual(body['error'], 'distance_unavailable')
        self.assertIsNone(body['distance_km'])

    def test_options(self):
        response = lambda_handler(make_event({'action': 'options'}), None)

        self.assertEqual(response['statusCode'], 200)
        body = json.loads(response['body'])
        self.assertIn('São Paulo, SP', body['locations'])
        self.assertIn('Brasília, DF', body['locations_by_state']['DF'])
        modes = {m['mode']: m for m in body['transport_modes']}
        self.assertEqual(set(modes), {'bicycle', 'car', 'bus', 'truck'})
        self.assertEqual(modes['truck']['label'], 'Caminhão')

    @patch('lambda_handler.process_trip')
    def test_unexpected_error(self, mock_process):
        mock_process.side_effect = RuntimeError("boom")
        event = make_event({'origin': 'Recife, PE', 'destination': 'Olinda, PE', 'transport_mode': 'car'})

        with self.assertLogs(level='ERROR'):
            response = lambda_handler(event, None)

        self.assertEqual(response['statusCode'], 500)
        self.assertIn('boom', json.loads(response['body'])['error'])


if __name__ == '__main__':
    unittest.main()
