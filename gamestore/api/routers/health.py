from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/__routes")
def list_routes(request: Request):
    #debug: lista zarejestrowanych tras
    routes = []
    for route in request.app.routes:
        methods = getattr(route, "methods", None)
        if methods:
            routes.append({"path": route.path, "methods": ",".join(sorted(methods))})
    return {"routes": routes}
