"""
Composition root.
Configures logging and wires the session, transport, repositories and use
cases into one console object.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import requests

from backoffice.application.notifications import Notifier
from backoffice.application.search import DebouncedSearch
from backoffice.application.use_cases.contract_use_cases import (
    DeleteContractUseCase,
    GetContractUseCase,
    ListContractsUseCase,
    SaveContractUseCase,
)
from backoffice.application.use_cases.movement_use_cases import (
    DownloadProofUseCase,
    GenerateMovementsUseCase,
    ListMovementStatusesUseCase,
    ListMovementsUseCase,
    SettleMovementUseCase,
)
from backoffice.config import Settings, get_settings
from backoffice.infrastructure.auth.session import SessionContext
from backoffice.infrastructure.http.api_client import ApiClient
from backoffice.infrastructure.notifications import LoggingNotifier
from backoffice.infrastructure.repositories import (
    HttpContractRepository,
    HttpMovementRepository,
    HttpReferenceDataRepository,
)
from backoffice.infrastructure.validation.validators import ProofFileValidator


logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


@dataclass
class Console:
    """Everything a UI surface needs, wired against one backend."""

    settings: Settings
    session: SessionContext
    client: ApiClient
    notifier: Notifier
    contracts: HttpContractRepository
    movements: HttpMovementRepository
    reference_data: HttpReferenceDataRepository
    proof_validator: ProofFileValidator
    save_contract: SaveContractUseCase
    delete_contract: DeleteContractUseCase
    get_contract: GetContractUseCase
    list_contracts: ListContractsUseCase
    list_movements: ListMovementsUseCase
    list_movement_statuses: ListMovementStatusesUseCase
    settle_movement: SettleMovementUseCase
    download_proof: DownloadProofUseCase
    generate_movements: GenerateMovementsUseCase

    def debounced(self, fetch, on_result, on_error=None) -> DebouncedSearch:
        return DebouncedSearch(
            fetch,
            on_result,
            delay=self.settings.search_debounce_seconds,
            on_error=on_error,
        )


def create_console(
    settings: Optional[Settings] = None,
    session: Optional[SessionContext] = None,
    notifier: Optional[Notifier] = None,
    http: Optional[requests.Session] = None
) -> Console:
    settings = settings or get_settings()
    configure_logging(settings)
    session = session or SessionContext(login_path=settings.login_path)
    notifier = notifier or LoggingNotifier()

    client = ApiClient(
        settings.api_base_url,
        session,
        http=http,
        timeout=settings.request_timeout_seconds,
        debug=settings.debug,
    )
    contracts = HttpContractRepository(
        client,
        max_per_page=settings.max_page_size,
        min_search_length=settings.search_min_length,
    )
    movements = HttpMovementRepository(client)
    reference_data = HttpReferenceDataRepository(client)
    proof_validator = ProofFileValidator(settings)

    logger.info(f"Console wired against {settings.api_base_url} ({settings.environment})")

    return Console(
        settings=settings,
        session=session,
        client=client,
        notifier=notifier,
        contracts=contracts,
        movements=movements,
        reference_data=reference_data,
        proof_validator=proof_validator,
        save_contract=SaveContractUseCase(contracts, notifier),
        delete_contract=DeleteContractUseCase(contracts, notifier),
        get_contract=GetContractUseCase(contracts, notifier),
        list_contracts=ListContractsUseCase(
            contracts,
            notifier,
            max_per_page=settings.max_page_size,
            default_per_page=settings.default_page_size,
        ),
        list_movements=ListMovementsUseCase(
            movements, notifier, default_limit=settings.movement_page_size
        ),
        list_movement_statuses=ListMovementStatusesUseCase(movements, notifier),
        settle_movement=SettleMovementUseCase(movements, proof_validator, notifier),
        download_proof=DownloadProofUseCase(movements, notifier),
        generate_movements=GenerateMovementsUseCase(movements, notifier),
    )
