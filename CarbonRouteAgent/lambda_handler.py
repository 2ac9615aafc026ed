"""
Lambda handler for CarbonRouteAgent

Expected API Gateway payload:
{
    "origin": "São Paulo, SP",
    "destination": "Rio de Janeiro, RJ",
    "transport_mode": "car",
    "distance_km": 430,          # optional, skips distance estimation
    "session_id": "A52321B"      # optional, used in structured logs
}

Or, to list the options a client can offer:
{
    "action": "options"
}
"""

import json
import logging

from config import LOG_LEVEL, get_supported_modes, get_transport_mode_meta
from main import process_trip
from routes_data import get_default_registry
from shared_utils import log_structured

# Configure logging
logger = logging.getLogger()
logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))

CORS_HEADERS = {
    'Content-Type': 'application/json',
    'Access-Control-Allow-Origin': '*'
}


def _response(status_code, body):
    return {
        'statusCode': status_code,
        'headers': CORS_HEADERS,
        'body': json.dumps(body, ensure_ascii=False)
    }


def _options():
    registry = get_default_registry()
    return {
        'locations': registry.all_known_locations(),
        'locations_by_state': registry.locations_by_state(),
        'transport_modes': [
            {'mode': mode, **(get_transport_mode_meta(mode) or {})}
            for mode in get_supported_modes()
        ]
    }


def lambda_handler(event, context):
    """
    AWS Lambda handler for CarbonRouteAgent

    Args:
        event: API Gateway event (body as JSON string or dict)
        context: Lambda context

    Returns:
        API Gateway response with status and result
    """
    try:
        # Parse request body if it's a string (API Gateway)
        try:
            if isinstance(event.get('body'), str):
                body = json.loads(event['body'])
            else:
                body = event.get('body') or event
        except json.JSONDecodeError as e:
            return _response(400, {'error': f"Invalid JSON body: {e}"})

        if not isinstance(body, dict):
            return _response(400, {'error': 'Request body must be a JSON object'})

        if body.get('action') == 'options':
            return _response(200, _options())

        origin = body.get('origin')
        destination = body.get('destination')
        transport_mode = body.get('transport_mode')
        distance_km = body.get('distance_km')
        session_id = body.get('session_id')

        # Validate required parameters
        if not isinstance(transport_mode, str) or not transport_mode:
            return _response(400, {'error': 'Missing required parameter: transport_mode'})

        # An empty form field means no manual distance
        if distance_km in (None, '') and (not origin or not destination):
            return _response(400, {
                'error': 'Missing required parameters: origin and destination (or distance_km)'
            })

        log_structured('INFO', "Processing request", session_id=session_id, stage="request",
                       origin=origin, destination=destination, transport_mode=transport_mode)

        try:
            result = process_trip(
                origin,
                destination,
                transport_mode,
                manual_distance_km=distance_km,
                session_id=session_id
            )
        except ValueError as e:
            log_structured('WARNING', f"Rejected request: {e}", session_id=session_id, stage="request")
            return _response(400, {'error': str(e)})

        if not result['success']:
            # Client should ask the user for a manual distance
            return _response(422, result)

        return _response(200, result)

    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        return _response(500, {'error': f"Internal server error: {str(e)}"})


# For local testing
if __name__ == "__main__":
    test_event = {
        'body': {
            'origin': 'São Paulo, SP',
            'destination': 'Rio de Janeiro, RJ',
            'transport_mode': 'bus'
        }
    }

    result = lambda_handler(test_event, None)
    print(json.dumps(result, indent=2, ensure_ascii=False))
