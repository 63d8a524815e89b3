from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse

from commodity_gateway.api.cors import cors_headers

router = APIRouter()

_CACHE_CONTROL = "public, s-maxage=300, stale-while-revalidate=60"
_DEBUG_SYMBOL = "WTI"


def _cors(request: Request) -> dict[str, str]:
    settings = request.app.state.get_settings()
    return cors_headers(request, settings.COMMODITY_CORS_ORIGINS)


@router.options('/commodities')
def commodities_preflight(request: Request):
    return Response(status_code=204, headers=_cors(request))


@router.get('/commodities')
def get_commodities(request: Request, debug: str | None = None):
    service = request.app.state.commodity_service
    headers = _cors(request)
    is_debug = debug == '1'

    if is_debug and service.has_api_key():
        # single-symbol probe exposing the raw provider payload
        result = service.inspect(_DEBUG_SYMBOL)
        return JSONResponse(
            {
                'debug': True,
                'alphaVantageRawResponse': result['raw'],
                'parsedPointsCount': result['parsed_points_count'],
                'status': result['status'],
                'builtQuote': result['quote'].model_dump(by_alias=True),
            },
            status_code=200,
            headers=headers,
        )

    result = service.get_quotes()
    if result.error:
        body = {'error': result.error, 'quotes': []}
        if is_debug:
            body['debug'] = {
                'message': 'Set ALPHAVANTAGE_API_KEY (or VITE_ALPHAVANTAGEAPI / ALPHAVANTAGEAPI)',
            }
        return JSONResponse(body, status_code=200, headers=headers)

    return JSONResponse(
        [q.model_dump(by_alias=True) for q in result.quotes],
        status_code=200,
        headers={'Cache-Control': _CACHE_CONTROL, **headers},
    )


@router.api_route('/commodities', methods=['POST', 'PUT', 'PATCH', 'DELETE', 'HEAD', 'TRACE', 'CONNECT'])
def commodities_method_not_allowed(request: Request):
    return JSONResponse({'error': 'Method not allowed'}, status_code=405, headers=_cors(request))


@router.get('/metrics/commodity')
def commodity_metrics(request: Request):
    return request.app.state.commodity_service.metrics()
