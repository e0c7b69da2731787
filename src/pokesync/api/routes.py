"""Ranking and manual sync endpoints under ``/pokemon``.

Handlers are plain functions so FastAPI runs them in its worker threads; a
sync cycle drives its own event loop.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response, status

from pokesync.api.schemas import ErrorResponse, PokemonDto
from pokesync.app import get_sync_orchestrator, rank_pokemon
from pokesync.domain.model import RankingAttribute
from pokesync.domain.ports.unit_of_work import UnitOfWorkFactory
from pokesync.domain.synchronization import SyncOrchestrator

router = APIRouter(prefix="/pokemon", tags=["pokemon"])

NumPokemon = Annotated[int, Query(alias="numPokemon", description="Number of Pokémon to return")]

_ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


def get_unit_of_work_factory(request: Request) -> UnitOfWorkFactory:
    return request.app.state.unit_of_work_factory


def get_orchestrator(request: Request) -> SyncOrchestrator:
    orchestrator = request.app.state.orchestrator
    return orchestrator if orchestrator is not None else get_sync_orchestrator()


UnitOfWorkFactoryDep = Annotated[UnitOfWorkFactory, Depends(get_unit_of_work_factory)]
OrchestratorDep = Annotated[SyncOrchestrator, Depends(get_orchestrator)]


def _ranking(
    attribute: RankingAttribute,
    n: int,
    unit_of_work_factory: UnitOfWorkFactory,
) -> list[PokemonDto]:
    pokemon = rank_pokemon(attribute, n, unit_of_work_factory=unit_of_work_factory)
    return [PokemonDto.from_domain(item) for item in pokemon]


@router.get("/highest", response_model=list[PokemonDto], responses=_ERROR_RESPONSES)
def highest(
    num_pokemon: NumPokemon,
    unit_of_work_factory: UnitOfWorkFactoryDep,
) -> list[PokemonDto]:
    """Tallest Pokémon first."""
    return _ranking(RankingAttribute.HEIGHT, num_pokemon, unit_of_work_factory)


@router.get("/heaviest", response_model=list[PokemonDto], responses=_ERROR_RESPONSES)
def heaviest(
    num_pokemon: NumPokemon,
    unit_of_work_factory: UnitOfWorkFactoryDep,
) -> list[PokemonDto]:
    """Heaviest Pokémon first."""
    return _ranking(RankingAttribute.WEIGHT, num_pokemon, unit_of_work_factory)


@router.get("/highestExperience", response_model=list[PokemonDto], responses=_ERROR_RESPONSES)
def highest_experience(
    num_pokemon: NumPokemon,
    unit_of_work_factory: UnitOfWorkFactoryDep,
) -> list[PokemonDto]:
    """Highest base experience first; entries without one come last."""
    return _ranking(RankingAttribute.BASE_EXPERIENCE, num_pokemon, unit_of_work_factory)


@router.post(
    "/sync",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        status.HTTP_503_SERVICE_UNAVAILABLE: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
def sync(orchestrator: OrchestratorDep) -> Response:
    """Run a full sync cycle and return once it has been persisted."""
    orchestrator.run_sync_cycle()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
