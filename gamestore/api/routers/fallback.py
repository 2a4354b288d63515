from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

router = APIRouter(tags=["fallback"], include_in_schema=False)


#musi byc dolaczony jako ostatni
@router.api_route("/{path:path}", methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
def api_not_found(path: str, request: Request):
    return JSONResponse(
        status_code=404,
        content={"error": "API route not found", "path": f"/{path}"},
    )
