"""Home page and registration submission endpoint"""

import logging

from fastapi import Request
from fastapi.responses import HTMLResponse, PlainTextResponse

from regdesk.models.database import get_db
from regdesk.services.registration_service import RegistrationService

logger = logging.getLogger(__name__)


def _field(form, query, key: str) -> str:
    """First body value, then first query string value, else empty string"""
    values = form.getlist(key) or query.getlist(key)
    if not values:
        return ""
    value = values[0]
    return value if isinstance(value, str) else ""


def _render(request: Request, template_name: str):
    """Render one of the startup templates with an empty context"""
    template = request.app.state.context.templates[template_name]
    try:
        content = template.render({})
    except Exception as e:
        logger.error(f"error: failed to render template '{template_name}': {e}")
        return PlainTextResponse("Internal Server Error", status_code=500)
    return HTMLResponse(content)


async def home(request: Request):
    """Serve the registration form, or record a submission and confirm it

    Registered without a method list, so every HTTP method reaches it.
    """
    try:
        form_data = await request.form()
    except Exception as e:
        logger.warning(f"error: failed to parse form: {e}")
        return PlainTextResponse("Bad Request", status_code=400)

    name = _field(form_data, request.query_params, "name")
    phone = _field(form_data, request.query_params, "phone")

    if name and phone:
        with get_db(request) as db:
            registration_service = RegistrationService(db)
            try:
                registration_service.create_registration(name=name, phone=phone)
            except Exception as e:
                logger.error(f"error: failed to insert registration: {e}")
                return PlainTextResponse("Internal Server Error", status_code=500)

        return _render(request, "registration")

    return _render(request, "home")
