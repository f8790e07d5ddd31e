from pathlib import Path

from fastapi import Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import FileResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


class StaticSiteResponder:
    """Serve the built front end for any GET that no API route claimed.

    Registered as the 404 handler: an existing file under ``root`` is sent
    as-is, any other path falls back to the index document so the
    single-page app can route it client-side. Requests under the API prefix
    keep their normal 404 response.
    """

    def __init__(self, root: str | Path, *, index: str = "index.html", api_prefix: str = "/api") -> None:
        self.root = Path(root).resolve()
        self.index = index
        self.api_prefix = api_prefix.rstrip("/")

    def resolve(self, path: str) -> Path | None:
        candidate = (self.root / path.lstrip("/")).resolve()
        if not candidate.is_relative_to(self.root):
            return None
        if candidate.is_file():
            return candidate
        index = self.root / self.index
        if index.is_file():
            return index
        return None

    def _is_api_path(self, path: str) -> bool:
        return bool(self.api_prefix) and (path == self.api_prefix or path.startswith(self.api_prefix + "/"))

    async def __call__(self, request: Request, exc: StarletteHTTPException):
        if request.method in ("GET", "HEAD") and not self._is_api_path(request.url.path):
            target = self.resolve(request.url.path)
            if target is not None:
                return FileResponse(target)
        return await http_exception_handler(request, exc)
