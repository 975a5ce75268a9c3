from newssphere.server.app import SECURITY_HEADERS, create_app, router, status_code_for

__all__ = ["SECURITY_HEADERS", "create_app", "router", "status_code_for"]
