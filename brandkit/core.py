import threading
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import dataclass, fields, replace
from enum import IntEnum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, TypeVar

from pydantic import BaseModel

from . import prompts
from .archive import build_archive
from .errors import (
    BrandkitError,
    ContentIncompleteError,
    ValidationError,
    WorkflowStateError,
)
from .generator import GenerationGateway
from .languages import DEFAULT_SOURCE_LANGUAGE, DEFAULT_TARGET_LANGUAGE, is_supported


T = TypeVar("T")


class WorkflowStep(IntEnum):
    INTRODUCTION = 0
    PROJECT_SETUP = 1
    MEDIA_PLAN = 2
    MARKET_STRATEGY = 3
    LOGO_CREATION = 4
    BANNER_CREATION = 5
    CONCLUSION = 6

    @property
    def title(self) -> str:
        return STEP_TITLES[self]


STEP_TITLES: Dict[WorkflowStep, str] = {
    WorkflowStep.INTRODUCTION: "Introduction",
    WorkflowStep.PROJECT_SETUP: "Project details",
    WorkflowStep.MEDIA_PLAN: "Media plan",
    WorkflowStep.MARKET_STRATEGY: "Strategy",
    WorkflowStep.LOGO_CREATION: "Logo",
    WorkflowStep.BANNER_CREATION: "Banners",
    WorkflowStep.CONCLUSION: "Conclusion",
}


@dataclass(frozen=True)
class ProjectInput:
    company_name: str = ""
    location: str = ""
    source_language: str = DEFAULT_SOURCE_LANGUAGE
    target_language: str = DEFAULT_TARGET_LANGUAGE


class BrandAdjectives(BaseModel):
    """Two contrasting adjectives describing the brand."""

    adj1: str
    adj2: str


DEFAULT_ADJECTIVES = BrandAdjectives(
    adj1="trust and innovation",
    adj2="dynamism and creativity",
)


@dataclass(frozen=True)
class BilingualText:
    target: str
    source: str


@dataclass(frozen=True)
class MarketStrategy:
    target: str
    source: str
    usp: str
    adjectives: BrandAdjectives
    scene: str


@dataclass(frozen=True)
class GeneratedContent:
    # Images are stored as data URIs.
    media_plan: Optional[BilingualText] = None
    market_strategy: Optional[MarketStrategy] = None
    logos: Optional[Tuple[str, ...]] = None
    banners: Optional[Tuple[str, ...]] = None

    def is_complete(self) -> bool:
        return None not in (self.media_plan, self.market_strategy, self.logos, self.banners)


ContentPatch = Dict[str, Any]
StepHandler = Callable[
    [ProjectInput, GeneratedContent, GenerationGateway],
    Tuple[ContentPatch, WorkflowStep],
]


def validate_input(project: ProjectInput) -> None:
    if not project.company_name.strip():
        raise ValidationError("Company name is required.")
    if not project.location.strip():
        raise ValidationError("Location is required.")
    for label, code in (
        ("Source language", project.source_language),
        ("Target language", project.target_language),
    ):
        if not is_supported(code):
            raise ValidationError(f"{label} '{code}' is not supported.")


def run_parallel(calls: Sequence[Callable[[], T]]) -> List[T]:
    """
    Run independent calls concurrently and return their results in order.

    The first failure is re-raised once it is observed; results of the
    other calls are discarded.
    """
    with ThreadPoolExecutor(max_workers=len(calls)) as executor:
        futures = [executor.submit(call) for call in calls]
        done, _ = wait(futures, return_when=FIRST_EXCEPTION)
        for future in futures:
            if future in done and future.exception() is not None:
                raise future.exception()
        return [future.result() for future in futures]


# --- step handlers -----------------------------------------------------------


def _start_project(project, content, gateway):
    validate_input(project)
    return {}, WorkflowStep.PROJECT_SETUP


def _create_media_plan(project, content, gateway):
    target = gateway.generate_text(
        prompts.media_plan_prompt(project.company_name, project.location, project.target_language)
    )
    source = gateway.generate_text(prompts.translation_prompt(target, project.source_language))
    return {"media_plan": BilingualText(target=target, source=source)}, WorkflowStep.MEDIA_PLAN


def _create_market_strategy(project, content, gateway):
    if content.media_plan is None:
        raise ContentIncompleteError("The media plan has not been generated yet.")

    # Each call feeds the next one, so these stay sequential.
    target = gateway.generate_text(
        prompts.market_strategy_prompt(
            project.company_name,
            project.location,
            content.media_plan.source,
            project.target_language,
        )
    )
    source = gateway.generate_text(prompts.translation_prompt(target, project.source_language))
    usp = gateway.generate_text(prompts.usp_prompt(source))
    adjectives = gateway.generate_structured(prompts.adjectives_prompt(source), BrandAdjectives)
    scene = gateway.generate_text(prompts.scene_prompt(usp))

    strategy = MarketStrategy(
        target=target,
        source=source,
        usp=usp,
        adjectives=adjectives,
        scene=scene,
    )
    return {"market_strategy": strategy}, WorkflowStep.MARKET_STRATEGY


def _create_logos(project, content, gateway):
    strategy = content.market_strategy
    adjectives = strategy.adjectives if strategy and strategy.adjectives else DEFAULT_ADJECTIVES

    logo_prompts = prompts.logo_prompts(
        project.company_name,
        adjectives.adj1,
        adjectives.adj2,
        project.target_language,
    )
    logos = run_parallel(
        [lambda p=prompt: gateway.generate_image(p, aspect_ratio="1:1") for prompt in logo_prompts]
    )
    return {"logos": tuple(logos)}, WorkflowStep.LOGO_CREATION


def _create_banners(project, content, gateway):
    strategy = content.market_strategy
    scene = strategy.scene if strategy and strategy.scene else prompts.fallback_scene(project.company_name)

    banner_prompts = prompts.banner_prompts(project.company_name, scene, project.target_language)
    banners = run_parallel(
        [
            lambda p=prompt, r=ratio: gateway.generate_image(p, aspect_ratio=r)
            for ratio, prompt in banner_prompts
        ]
    )
    return {"banners": tuple(banners)}, WorkflowStep.BANNER_CREATION


def _finish(project, content, gateway):
    if not content.banners:
        raise ContentIncompleteError("Banners have not been generated yet.")
    return {}, WorkflowStep.CONCLUSION


STEP_HANDLERS: Dict[WorkflowStep, StepHandler] = {
    WorkflowStep.INTRODUCTION: _start_project,
    WorkflowStep.PROJECT_SETUP: _create_media_plan,
    WorkflowStep.MEDIA_PLAN: _create_market_strategy,
    WorkflowStep.MARKET_STRATEGY: _create_logos,
    WorkflowStep.LOGO_CREATION: _create_banners,
    WorkflowStep.BANNER_CREATION: _finish,
}


class BrandingWorkflow:
    """
    Drives one branding session through its fixed sequence of steps:
    - Introduction: collect company, location and languages
    - ProjectSetup -> MediaPlan: media plan plus its review translation
    - MediaPlan -> MarketStrategy: strategy, translation, USP, adjectives, scene
    - MarketStrategy -> LogoCreation: two logo concepts
    - LogoCreation -> BannerCreation: three banners
    - BannerCreation -> Conclusion

    A step's content is committed only after every call in it succeeds.
    """

    def __init__(self, gateway: GenerationGateway) -> None:
        self.gateway = gateway
        self._step_lock = threading.Lock()
        self.reset()

    def reset(self) -> None:
        self.current_step = WorkflowStep.INTRODUCTION
        self.input = ProjectInput()
        self.content = GeneratedContent()
        self.last_error: Optional[str] = None

    def update_input(self, field: str, value: str) -> None:
        if self.current_step is not WorkflowStep.INTRODUCTION:
            raise WorkflowStateError("Project details can only be edited before the workflow starts.")
        if field not in {f.name for f in fields(ProjectInput)}:
            raise WorkflowStateError(f"Unknown project field '{field}'.")
        self.input = replace(self.input, **{field: value})

    def validate_input(self) -> None:
        validate_input(self.input)

    @property
    def is_running(self) -> bool:
        return self._step_lock.locked()

    @property
    def is_finished(self) -> bool:
        return self.current_step is WorkflowStep.CONCLUSION

    @property
    def progress(self) -> Tuple[int, int]:
        """(current step number, total steps); Introduction is step 0."""
        return int(self.current_step), len(WorkflowStep) - 1

    def advance(self) -> bool:
        """
        Run the current step and move to the next one.

        Returns False and records `last_error` when the step fails; the
        step can then be retried by calling `advance()` again.
        """
        step = self.current_step
        handler = STEP_HANDLERS.get(step)
        if handler is None:
            raise WorkflowStateError("The workflow is already complete.")
        if not self._step_lock.acquire(blocking=False):
            raise WorkflowStateError("A step is already running.")

        print(f"▶️  Running step: {step.title}")
        try:
            patch, next_step = handler(self.input, self.content, self.gateway)
        except BrandkitError as e:
            self.last_error = str(e) or e.__class__.__name__
            print(f"❌ {step.title} failed: {self.last_error}")
            return False
        else:
            self.content = replace(self.content, **patch)
            self.current_step = next_step
            self.last_error = None
            return True
        finally:
            self._step_lock.release()

    def download(self) -> Optional[bytes]:
        """Build the zip archive, or record the error and return None."""
        try:
            archive = build_archive(self.input, self.content)
        except ContentIncompleteError as e:
            self.last_error = str(e)
            return None
        self.last_error = None
        return archive
