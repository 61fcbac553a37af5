"""OpenAPI customization.

Adds tag descriptions and documents the CORS preflight that the CORS
middleware answers before routing (and which therefore never shows up as a
route of its own).
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI

_TAGS = [
    {
        "name": "Lenders",
        "description": "Read-only proxy of the Lenders sheet (rate limited per client IP).",
    },
    {
        "name": "Health",
        "description": "Liveness checks.",
    },
]


def apply_openapi_customizations(app: FastAPI) -> None:
    """Patch FastAPI's OpenAPI generation with tags and preflight docs."""

    original_openapi = app.openapi

    def custom_openapi() -> Dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        schema = original_openapi()

        tags = schema.setdefault("tags", [])
        existing_tag_names = {t.get("name") for t in tags}
        for tag in _TAGS:
            if tag["name"] not in existing_tag_names:
                tags.append(tag)

        for path, methods in schema.get("paths", {}).items():
            if "get" in methods and path != "/health":
                methods.setdefault(
                    "options",
                    {
                        "summary": "CORS preflight",
                        "tags": methods["get"].get("tags", []),
                        "responses": {"200": {"description": "Empty body with CORS headers"}},
                    },
                )

        app.openapi_schema = schema
        return schema

    app.openapi = custom_openapi  # type: ignore[assignment]
