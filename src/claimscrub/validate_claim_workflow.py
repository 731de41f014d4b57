"""Claim validation workflow.

A 3-step pipeline that:
1. Loads the claim and its service lines from the claim store
2. Runs the configured rule checks (NPI lookups go to the provider registry)
3. Scores the run, replaces the stored validation and returns the response
"""

import logging
from datetime import date
from typing import Annotated, Literal

from pydantic import BaseModel
from workflows import Context, Workflow, step
from workflows.events import Event, StartEvent, StopEvent
from workflows.resource import Resource, ResourceConfig

from .config import ValidationConfig
from .engine import load_claim, record_validation
from .registry import ProviderRegistry, get_provider_registry
from .schemas import Claim, ValidationCheck, ValidationResult, ValidationStatus
from .store import ClaimStore, get_claim_store
from .validators import resolve_checks, run_all_validations

logger = logging.getLogger(__name__)


# --- Events ---


class ValidateClaimStartEvent(StartEvent):
    """Start event naming the claim to validate."""

    claim_id: str
    checks: list[ValidationCheck] | None = None
    reference_date: date | None = None


class StatusEvent(Event):
    """Progress status update for the client."""

    message: str
    level: Literal["info", "warning", "error"] = "info"


class ClaimLoadedEvent(Event):
    """Emitted after the claim is loaded from the store."""

    pass


class ChecksCompleteEvent(Event):
    """Emitted after all selected checks have produced a result."""

    pass


# --- Workflow State ---


class WorkflowState(BaseModel):
    """State persisted across workflow steps."""

    claim: Claim | None = None
    checks: list[ValidationCheck] | None = None
    reference_date: date | None = None
    validation_results: list[ValidationResult] = []


# --- Workflow ---


class ClaimValidationWorkflow(Workflow):
    """Scrub a claim for denial risks before it is submitted to the payer."""

    @step()
    async def fetch_claim(
        self,
        event: ValidateClaimStartEvent,
        ctx: Context[WorkflowState],
        store: Annotated[ClaimStore, Resource(get_claim_store)],
    ) -> ClaimLoadedEvent:
        """Load the claim; unknown or blank ids fail the run before any check."""
        claim = load_claim(event.claim_id, store)

        async with ctx.store.edit_state() as state:
            state.claim = claim
            state.checks = event.checks
            state.reference_date = event.reference_date

        ctx.write_event_to_stream(
            StatusEvent(
                message=f"Loaded claim {claim.claim_number or claim.id} with {len(claim.service_lines)} service lines"
            )
        )
        return ClaimLoadedEvent()

    @step()
    async def run_checks(
        self,
        event: ClaimLoadedEvent,
        ctx: Context[WorkflowState],
        registry: Annotated[ProviderRegistry, Resource(get_provider_registry)],
        validation_config: Annotated[
            ValidationConfig,
            ResourceConfig(
                config_file="configs/config.json",
                path_selector="validation",
                label="Validation Settings",
                description="Timely filing windows, registry timeout and enabled checks",
            ),
        ],
    ) -> ChecksCompleteEvent:
        """Run the requested checks, or the configured defaults."""
        state = await ctx.store.get_state()
        checks = resolve_checks(state.checks if state.checks is not None else validation_config.checks)
        logger.info("Running %d checks on claim %s", len(checks), state.claim.id)

        ctx.write_event_to_stream(
            StatusEvent(message=f"Running {len(checks)} validation checks...")
        )

        results = run_all_validations(
            state.claim,
            checks=checks,
            registry=registry,
            settings=validation_config.settings,
            today=state.reference_date,
        )

        async with ctx.store.edit_state() as state:
            state.validation_results = results

        failed = [r.check_type.value for r in results if r.status == ValidationStatus.FAIL]
        warned = [r.check_type.value for r in results if r.status == ValidationStatus.WARNING]
        if failed:
            ctx.write_event_to_stream(
                StatusEvent(message=f"Failed checks: {', '.join(failed)}", level="error")
            )
        elif warned:
            ctx.write_event_to_stream(
                StatusEvent(message=f"Checks with warnings: {', '.join(warned)}", level="warning")
            )
        else:
            ctx.write_event_to_stream(StatusEvent(message="All validation checks passed"))

        return ChecksCompleteEvent()

    @step()
    async def store_results(
        self,
        event: ChecksCompleteEvent,
        ctx: Context[WorkflowState],
        store: Annotated[ClaimStore, Resource(get_claim_store)],
    ) -> StopEvent:
        """Score the run and replace the claim's stored validation."""
        state = await ctx.store.get_state()
        validation = record_validation(state.claim.id, state.validation_results, store)

        ctx.write_event_to_stream(
            StatusEvent(message=f"Validation complete: score {validation.score}")
        )
        return StopEvent(result=validation.to_response())


workflow = ClaimValidationWorkflow(timeout=None)
