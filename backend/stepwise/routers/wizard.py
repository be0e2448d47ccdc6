"""Wizard routes: five endpoints per registered wizard type.

Endpoints (mounted under settings.wizard_prefix):
  GET    /                              → registered wizard types
  GET    /{wizard}                      → render the first step (create)
  POST   /{wizard}                      → submit the first step (store)
  GET    /{wizard}/{id}                 → resume at the next open step (show)
  GET    /{wizard}/{id}/{step}          → render a step (show)
  POST   /{wizard}/{id}/{step}          → submit a step (update)
  DELETE /{wizard}/{id}                 → delete the wizard (destroy)

Design:
  - A fresh wizard object is built per request from the registry.
  - Step input is the JSON object body or the submitted form fields.
  - The wizard answers with a rendered step (200) or a 303 redirect.
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from stepwise.database import get_db
from stepwise.schemas.wizard import WizardTypeInfo
from stepwise.wizard import (
    AbstractWizard,
    DatabaseWizardRepository,
    JSONResponseRenderer,
    ResponseRenderer,
    WizardEvents,
    WizardRepository,
    WizardRequest,
    registry,
    wizard_events,
)

router = APIRouter()


# ── Dependencies ─────────────────────────────────────────────

async def get_repository(db: AsyncSession = Depends(get_db)) -> WizardRepository:
    return DatabaseWizardRepository(db)


def get_renderer() -> ResponseRenderer:
    return JSONResponseRenderer()


def get_events() -> WizardEvents:
    return wizard_events


class WizardFactory:
    """Builds the wizard named in the path with the request's collaborators."""

    def __init__(
        self,
        repository: WizardRepository = Depends(get_repository),
        renderer: ResponseRenderer = Depends(get_renderer),
        events: WizardEvents = Depends(get_events),
    ):
        self.repository = repository
        self.renderer = renderer
        self.events = events

    def __call__(self, wizard_slug: str) -> AbstractWizard:
        wizard_class = registry.get(wizard_slug)
        return wizard_class(self.repository, self.renderer, events=self.events)


# ── GET / ────────────────────────────────────────────────────

@router.get("/", response_model=list[WizardTypeInfo])
async def list_wizards():
    return [
        WizardTypeInfo(
            slug=w.slug,
            title=w.title,
            description=w.description,
            start_url=w.start_url(),
        )
        for w in registry.all()
    ]


# ── create / store ───────────────────────────────────────────

@router.get("/{wizard_slug}")
async def create_wizard(
    wizard_slug: str,
    request: Request,
    factory: WizardFactory = Depends(),
):
    wizard = factory(wizard_slug)
    return await wizard.create(await WizardRequest.from_http(request))


@router.post("/{wizard_slug}")
async def store_wizard(
    wizard_slug: str,
    request: Request,
    factory: WizardFactory = Depends(),
):
    wizard = factory(wizard_slug)
    return await wizard.store(await WizardRequest.from_http(request))


# ── show ─────────────────────────────────────────────────────

@router.get("/{wizard_slug}/{wizard_id}")
async def resume_wizard(
    wizard_slug: str,
    wizard_id: int,
    request: Request,
    factory: WizardFactory = Depends(),
):
    wizard = factory(wizard_slug)
    return await wizard.show(await WizardRequest.from_http(request), wizard_id)


@router.get("/{wizard_slug}/{wizard_id}/{step_slug}")
async def show_step(
    wizard_slug: str,
    wizard_id: int,
    step_slug: str,
    request: Request,
    factory: WizardFactory = Depends(),
):
    wizard = factory(wizard_slug)
    return await wizard.show(await WizardRequest.from_http(request), wizard_id, step_slug)


# ── update / destroy ─────────────────────────────────────────

@router.post("/{wizard_slug}/{wizard_id}/{step_slug}")
async def update_step(
    wizard_slug: str,
    wizard_id: int,
    step_slug: str,
    request: Request,
    factory: WizardFactory = Depends(),
):
    wizard = factory(wizard_slug)
    return await wizard.update(await WizardRequest.from_http(request), wizard_id, step_slug)


@router.delete("/{wizard_slug}/{wizard_id}")
async def destroy_wizard(
    wizard_slug: str,
    wizard_id: int,
    request: Request,
    factory: WizardFactory = Depends(),
):
    wizard = factory(wizard_slug)
    return await wizard.destroy(await WizardRequest.from_http(request), wizard_id)
