"""FastAPI endpoints for the creator store"""

from typing import Any, Optional

from fastapi import FastAPI, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .creators import CreatorService, get_creator_service
from .db.config import settings
from .db.repositories.factory import get_unit_of_work
from .errors import NotFoundError, ValidationError
from .jobs import run_creator_purge
from .normalize import to_api_json
from .observability import metrics, get_health_status, logger


app = FastAPI(
    title="Creator Store API",
    description="Creator normalization, identity resolution and purging",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============ Schemas ============

class ResolveRequest(BaseModel):
    creator: dict[str, Any]
    create: bool = False


class ResolveResponse(BaseModel):
    creator_id: Optional[int]


class CreatorOut(BaseModel):
    id: int
    first_name: str
    last_name: str
    field_mode: int
    api_json: dict[str, Any]


class CreatorItemsOut(BaseModel):
    creator_id: int
    items: list[int]
    associations: int


class ItemCreatorsResponse(BaseModel):
    item_id: int
    creator_ids: list[int]


# ============ Error mapping ============

@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=422, content={"detail": exc.message, "rule": exc.rule})


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": exc.message})


# ============ Lifecycle ============

@app.on_event("startup")
async def startup():
    if settings.backend == "surrealdb":
        from .db.surrealdb import init_surreal_db
        await init_surreal_db()
    else:
        from .db.database import init_db
        await init_db()

    service = get_creator_service()
    await service.load_creator_types()
    if settings.purge_on_startup:
        await run_creator_purge(service)
    logger.info("Creator store started", extra={"extra": {"backend": settings.backend}})


@app.on_event("shutdown")
async def shutdown():
    get_creator_service().cache.clear()

    if settings.backend == "surrealdb":
        from .db.surrealdb import close_surreal_db
        await close_surreal_db()
    else:
        from .db.database import close_db
        await close_db()


# ============ Creators ============

@app.post("/creators/resolve", response_model=ResolveResponse)
async def resolve_creator_endpoint(
    request: ResolveRequest,
    service: CreatorService = Depends(get_creator_service),
):
    """Find the creator matching the given data, optionally creating it"""
    creator_id = await service.resolve_or_create(request.creator, create=request.create)
    return ResolveResponse(creator_id=creator_id)


@app.get("/creators/{creator_id}", response_model=CreatorOut)
async def get_creator_endpoint(
    creator_id: int,
    service: CreatorService = Depends(get_creator_service),
):
    """Get a creator by ID"""
    creator = await service.get(creator_id)
    return CreatorOut(
        id=creator_id,
        first_name=creator.first_name,
        last_name=creator.last_name,
        field_mode=int(creator.field_mode),
        api_json=to_api_json(creator, service.registry),
    )


@app.put("/creators/{creator_id}")
async def update_creator_endpoint(
    creator_id: int,
    data: dict[str, Any],
    service: CreatorService = Depends(get_creator_service),
):
    """Overwrite a creator's name fields"""
    updated = await service.update_creator(creator_id, data)
    return {"updated": updated}


@app.get("/creators/{creator_id}/items", response_model=CreatorItemsOut)
async def creator_items_endpoint(
    creator_id: int,
    service: CreatorService = Depends(get_creator_service),
):
    """Items referencing a creator"""
    items = await service.get_items_with_creator(creator_id)
    associations = await service.count_item_associations(creator_id)
    return CreatorItemsOut(creator_id=creator_id, items=items, associations=associations)


@app.put("/items/{item_id}/creators", response_model=ItemCreatorsResponse)
async def set_item_creators_endpoint(
    item_id: int,
    creators: list[dict[str, Any]],
    service: CreatorService = Depends(get_creator_service),
):
    """Replace the creators of an item"""
    creator_ids = await service.set_item_creators(item_id, creators)
    return ItemCreatorsResponse(item_id=item_id, creator_ids=creator_ids)


# ============ Maintenance ============

@app.post("/maintenance/purge")
async def purge_endpoint(service: CreatorService = Depends(get_creator_service)):
    """Purge creators that no item references"""
    return await run_creator_purge(service)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok", "version": app.version}


@app.get("/health/detailed")
async def detailed_health_check():
    """Health check including store access"""
    async with get_unit_of_work() as uow:
        return await get_health_status(uow)


@app.get("/metrics")
async def metrics_endpoint():
    """Application metrics"""
    return metrics.to_dict()
