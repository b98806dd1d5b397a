"""
DAO Viewer - API.

============================================================
RESPONSIBILITY
============================================================
REST API over the DAO facade for the web UI.

- Address errors map to 400, missing data to 404
- Responses are cached per data kind and carry Cache-Control
============================================================
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, FastAPI, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from dao_adapters.exceptions import InvalidAddressFormatError
from dao_viewer.cache import ResponseCache
from dao_viewer.config import ViewerConfig
from dao_viewer.schemas import (
    HealthResponse,
    KnownDaoListResponse,
    KnownDaoResponse,
    KnownDaoSchema,
    ProposalDetailsResponse,
    ProposalDetailsSchema,
    ProposalListResponse,
    ProposalSchema,
    RegisterDaoRequest,
    TreasuryResponse,
    TreasurySchema,
    ValidationResponse,
    ValidationSchema,
)
from dao_viewer.service import CONTRACT_UNAVAILABLE_MESSAGE, DaoService, get_default_service
from stacks_api.models import Network

logger = logging.getLogger(__name__)


router = APIRouter(prefix="/api/daos", tags=["DAOs"])


def _service(request: Request) -> DaoService:
    return request.app.state.service


def _cache(request: Request) -> ResponseCache:
    return request.app.state.cache


def _set_max_age(response: Response, seconds: int) -> None:
    response.headers["Cache-Control"] = f"public, max-age={seconds}"


def _check_address(service: DaoService, address: str, network: Network) -> None:
    try:
        service.check_address(address, network)
    except InvalidAddressFormatError as e:
        raise HTTPException(status_code=400, detail=e.message)


# ============================================================
# Known DAOs
# ============================================================

@router.get("", response_model=KnownDaoListResponse)
async def list_known_daos(request: Request, network: Optional[Network] = None):
    """
    Get the curated and registered DAOs for a network.
    """
    service = _service(request)
    daos = await service.list_known_daos(network)
    return KnownDaoListResponse(data=[KnownDaoSchema.from_model(dao) for dao in daos])


@router.post("", response_model=KnownDaoResponse, status_code=201)
async def register_dao(request: Request, body: RegisterDaoRequest):
    """
    Register an existing DAO contract with the viewer. Nothing is deployed.
    """
    service = _service(request)
    network = body.network or service.default_network

    if body.validate_contract:
        result = await service.validate_dao_contract(body.contract_address, network)
        if not result.is_valid:
            raise HTTPException(status_code=400, detail=result.error)

    try:
        dao = service.register_known_dao(
            body.name,
            body.contract_address,
            network=network,
            adapter_type=body.adapter_type,
        )
    except InvalidAddressFormatError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return KnownDaoResponse(
        message=f'Your DAO "{dao.name}" has been saved.',
        data=KnownDaoSchema.from_model(dao),
    )


# ============================================================
# DAO data
# ============================================================

@router.get("/{address}/treasury", response_model=TreasuryResponse)
async def get_treasury(
    request: Request,
    response: Response,
    address: str,
    network: Optional[Network] = None,
):
    """
    Get the DAO's treasury.
    """
    service = _service(request)
    network = network or service.default_network
    _check_address(service, address, network)

    ttl = service.config.cache.treasury_seconds
    treasury = await _cache(request).get_or_fetch(
        ("treasury", network, address),
        ttl,
        lambda: service.get_dao_treasury(address, network),
    )
    if treasury is None:
        raise HTTPException(status_code=404, detail=CONTRACT_UNAVAILABLE_MESSAGE)

    _set_max_age(response, ttl)
    return TreasuryResponse(data=TreasurySchema.from_model(treasury))


@router.get("/{address}/proposals", response_model=ProposalListResponse)
async def get_proposals(
    request: Request,
    response: Response,
    address: str,
    network: Optional[Network] = None,
):
    """
    Get all discoverable proposals. Empty when none can be found.
    """
    service = _service(request)
    network = network or service.default_network
    _check_address(service, address, network)

    ttl = service.config.cache.proposals_seconds
    proposals = await _cache(request).get_or_fetch(
        ("proposals", network, address),
        ttl,
        lambda: service.get_dao_proposals(address, network),
    )

    _set_max_age(response, ttl)
    return ProposalListResponse(data=[ProposalSchema.from_model(p) for p in proposals])


@router.get("/{address}/proposals/{proposal_id}", response_model=ProposalDetailsResponse)
async def get_proposal_details(
    request: Request,
    response: Response,
    address: str,
    proposal_id: str,
    network: Optional[Network] = None,
):
    """
    Get one proposal in detail.
    """
    service = _service(request)
    network = network or service.default_network
    _check_address(service, address, network)

    ttl = service.config.cache.proposal_details_seconds
    details = await _cache(request).get_or_fetch(
        ("proposal_details", network, address, proposal_id),
        ttl,
        lambda: service.get_proposal_details(proposal_id, address, network),
    )
    if details is None:
        raise HTTPException(status_code=404, detail=f"Proposal {proposal_id} not available")

    _set_max_age(response, ttl)
    return ProposalDetailsResponse(data=ProposalDetailsSchema.from_model(details))


@router.get("/{address}/validate", response_model=ValidationResponse)
async def validate_dao(
    request: Request,
    address: str,
    network: Optional[Network] = None,
):
    """
    Check that the contract exists (performs a full treasury fetch).
    """
    service = _service(request)
    result = await service.validate_dao_contract(address, network)
    return ValidationResponse(data=ValidationSchema.from_model(result))


# ============================================================
# FastAPI Application
# ============================================================

def create_app(
    service: Optional[DaoService] = None,
    config: Optional[ViewerConfig] = None,
) -> FastAPI:
    """
    Build the API application around a DAO service.

    Without a service, the default one (public Stacks API) is used.
    """
    if service is None:
        service = get_default_service(config)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        yield
        await service.close()

    app = FastAPI(
        lifespan=lifespan,
        title="Stacks DAO Viewer API",
        description="Read-only treasury and proposal data for DAO contracts on Stacks",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # CORS (Allow local frontend development)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.service = service
    app.state.cache = ResponseCache(max_entries=service.config.cache.max_entries)
    app.include_router(router)

    @app.get("/", tags=["Root"])
    async def root():
        return {
            "service": "Stacks DAO Viewer API",
            "version": "1.0.0",
            "docs": "/docs",
        }

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check():
        return HealthResponse(
            status="healthy",
            timestamp=datetime.utcnow().isoformat(),
            default_network=service.default_network.value,
            adapters=service.registry.list_adapters(),
        )

    logger.info(f"DAO viewer API ready (default network: {service.default_network.value})")
    return app
