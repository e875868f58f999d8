"""Router configuration.

RouterConfig is a frozen dataclass: immutable after creation, with no
string-key dict lookups.
"""

from dataclasses import dataclass

from perch.middleware.builtin import CorsPreflightConfig


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(
            auto_405=False,
            auto_cors_preflight=CorsPreflightConfig(trusted_origins=("https://a.com",)),
        )
    """

    # Request
    parse_cookie: bool = True  # Parse the Cookie header into request.cookies
    extract_request_parameters: bool = True  # Populate request.params on path match

    # Errors
    auto_405: bool = True  # 405 + Allow on method mismatch; 404 when off

    # Response
    auto_content_type: bool = False  # Infer Content-Type from the body on send()

    # CORS: installs an OPTIONS "*" preflight handler when set
    auto_cors_preflight: CorsPreflightConfig | None = None
