import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from brandkit.archive import write_archive
from brandkit.config import GatewayConfig
from brandkit.core import BrandingWorkflow, WorkflowStep
from brandkit.generator import ModelGateway, ProxyGateway
from brandkit.languages import (
    DEFAULT_SOURCE_LANGUAGE,
    DEFAULT_TARGET_LANGUAGE,
    LANGUAGES,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Generate a branding package (media plan, strategy, logos, banners) for a company."
    )
    parser.add_argument("--company", help="Company name.")
    parser.add_argument("--location", help="Location (city - state - country).")
    parser.add_argument(
        "--source-language",
        default=DEFAULT_SOURCE_LANGUAGE,
        help="Language of the review copy of each document.",
    )
    parser.add_argument(
        "--target-language",
        default=DEFAULT_TARGET_LANGUAGE,
        help="Language of the delivered material.",
    )
    parser.add_argument(
        "--output-root",
        type=Path,
        default=Path("outputs"),
        help="Folder where the campaign zip archive is written.",
    )
    parser.add_argument(
        "--gateway",
        choices=["model", "proxy"],
        default="model",
        help="Call the providers directly (model) or through a generation proxy (proxy).",
    )
    parser.add_argument(
        "--list-languages",
        action="store_true",
        help="Print the supported language codes and exit.",
    )
    return parser.parse_args()


def _preview(text: str) -> str:
    first_line = next((line for line in text.splitlines() if line.strip()), "")
    return first_line[:100]


def _report(workflow: BrandingWorkflow) -> None:
    content = workflow.content
    step = workflow.current_step
    number, total = workflow.progress
    print(f"✅ [{number}/{total}] {step.title}")

    if step is WorkflowStep.MEDIA_PLAN and content.media_plan:
        print(f"   {_preview(content.media_plan.target)}")
    elif step is WorkflowStep.MARKET_STRATEGY and content.market_strategy:
        strategy = content.market_strategy
        print(f"   USP: {strategy.usp}")
        print(f"   Adjectives: {strategy.adjectives.adj1} / {strategy.adjectives.adj2}")
        print(f"   Scene: {strategy.scene}")
    elif step is WorkflowStep.LOGO_CREATION and content.logos:
        print(f"   {len(content.logos)} logo concepts ready")
    elif step is WorkflowStep.BANNER_CREATION and content.banners:
        print(f"   {len(content.banners)} banners ready")


def main() -> None:
    # Load environment variables from a local .env file if present
    # (e.g. OPENAI_API_KEY=sk-..., REPLICATE_API_TOKEN=r8_...).
    load_dotenv()

    args = parse_args()

    if args.list_languages:
        for lang in LANGUAGES:
            print(f"{lang.code:6} {lang.name}")
        return

    if not args.company or not args.location:
        print("--company and --location are required.", file=sys.stderr)
        sys.exit(2)

    config = GatewayConfig.from_env()
    if args.gateway == "proxy":
        gateway = ProxyGateway.from_config(config)
    else:
        gateway = ModelGateway.from_config(config)

    workflow = BrandingWorkflow(gateway)
    workflow.update_input("company_name", args.company)
    workflow.update_input("location", args.location)
    workflow.update_input("source_language", args.source_language)
    workflow.update_input("target_language", args.target_language)

    while not workflow.is_finished:
        if not workflow.advance():
            print(f"Error: {workflow.last_error}", file=sys.stderr)
            sys.exit(1)
        _report(workflow)

    write_archive(workflow.input, workflow.content, args.output_root)


if __name__ == "__main__":
    main()
