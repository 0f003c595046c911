"""Ports the CSRF core consumes from its host."""

from flycsrf.csrf.ports.cookies import Cookie, CookieJar

__all__ = ["Cookie", "CookieJar"]
