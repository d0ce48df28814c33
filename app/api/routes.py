from fastapi import APIRouter, Depends, HTTPException, Request, status
from app.core.container import Services
from app.core.errors import ConfigurationError, FetchError, LunchMenuError, ParseError
from app.fetch.utils import now_local, resolve_location
from app.schemas import (
    DayMenu,
    MenuResponse,
    PaymentLink,
    Preferences,
    PreferencesUpdate,
    Timeline,
    TimelineKind,
    WeekDay,
)

router = APIRouter()

def get_services(request: Request) -> Services:
    return request.app.state.services

def _http_error(e: LunchMenuError) -> HTTPException:
    if isinstance(e, ConfigurationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if isinstance(e, FetchError):
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"Failed to fetch menu. {e}")
    if isinstance(e, ParseError):
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"Failed to parse HTML: {e}")
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

async def _menu_response(services: Services, location: str) -> MenuResponse:
    try:
        result = await services.menus.get_menu(location)
    except LunchMenuError as e:
        raise _http_error(e)

    return MenuResponse(
        location=result.location,
        cached=result.cached,
        fetched_at=result.fetched_at,
        days=[DayMenu(day=day, menu=result.menu.get(day.value)) for day in WeekDay.ordered()],
        today=services.menus.today_menu(result.menu, now_local()),
        pay_url=services.settings.pay_url_for(result.location.value),
    )

@router.get("/menu", response_model=MenuResponse)
async def selected_menu(services: Services = Depends(get_services)):
    """Weekly menu for the location chosen in preferences"""
    location = services.preferences.load().selected_location
    return await _menu_response(services, location.value)

@router.get("/menu/{location}", response_model=MenuResponse)
async def location_menu(location: str, services: Services = Depends(get_services)):
    """
    Weekly menu for a location (FB38 or N58).

    Served from the cache while it is younger than two hours.
    """
    return await _menu_response(services, location)

@router.get("/timeline/{location}", response_model=Timeline)
async def widget_timeline(
    location: str,
    kind: TimelineKind = TimelineKind.WEEK,
    services: Services = Depends(get_services),
):
    """Widget timeline: the whole week, or the current day with the 13:00 cutover"""
    try:
        return await services.timelines.timeline(location, kind)
    except LunchMenuError as e:
        raise _http_error(e)

@router.get("/payment/{location}", response_model=PaymentLink)
async def payment_link(location: str, services: Services = Depends(get_services)):
    """Online payment page for a location"""
    try:
        resolved = resolve_location(location)
    except LunchMenuError as e:
        raise _http_error(e)

    url = services.settings.pay_url_for(resolved.value)
    if not url:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No payment page for {resolved.value}")
    return PaymentLink(location=resolved, url=url)

@router.get("/preferences", response_model=Preferences)
async def read_preferences(services: Services = Depends(get_services)):
    return services.preferences.load()

@router.put("/preferences", response_model=Preferences)
async def update_preferences(changes: PreferencesUpdate, services: Services = Depends(get_services)):
    """Update only the fields present in the request body"""
    try:
        return services.preferences.update(**changes.model_dump(exclude_none=True))
    except OSError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to save preferences: {str(e)}"
        )

@router.delete("/cache/clear")
async def clear_cache(services: Services = Depends(get_services)):
    """Clear all cache entries"""
    removed = services.cache.clear_all()
    return {"message": "Cache cleared successfully", "removed": removed}

@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "Lunch Menu"}
