import io
import re
import zipfile
from pathlib import Path
from typing import TYPE_CHECKING, List, Tuple

from .errors import ContentIncompleteError
from .images import decode_data_uri, extension_for

if TYPE_CHECKING:
    from .core import GeneratedContent, ProjectInput


DOCUMENTS_DIR = "strategy_and_plans"
LOGOS_DIR = "visual_assets/logos"
BANNERS_DIR = "visual_assets/banners"

# Same order as the banners produced by the workflow.
BANNER_NAMES = ["banner_1x1_square", "banner_9x16_vertical", "banner_4x3_horizontal"]


def archive_filename(company_name: str) -> str:
    slug = re.sub(r"\s+", "_", company_name.strip()) or "project"
    return f"{slug}_brand_campaign.zip"


def _missing_parts(content: "GeneratedContent") -> List[str]:
    missing = []
    if content.media_plan is None:
        missing.append("media plan")
    if content.market_strategy is None:
        missing.append("market strategy")
    if not content.logos:
        missing.append("logos")
    if not content.banners:
        missing.append("banners")
    return missing


def _decode_image(label: str, uri: str) -> Tuple[str, bytes]:
    try:
        return decode_data_uri(uri)
    except ValueError as exc:
        raise ContentIncompleteError(f"The {label} image is not a valid data URI: {exc}") from exc


def build_archive(project: "ProjectInput", content: "GeneratedContent") -> bytes:
    """
    Package the generated campaign into a zip archive:

        strategy_and_plans/   media plan + market strategy, target and review versions
        visual_assets/logos/  logo_concept_1..2
        visual_assets/banners/ square, vertical and horizontal banners

    Images are decoded from their data URIs before being written.
    """
    missing = _missing_parts(content)
    if missing:
        raise ContentIncompleteError(
            "Content is not fully generated for download (missing: " + ", ".join(missing) + ")."
        )

    target = project.target_language
    source = project.source_language
    documents = {
        f"media_plan_{target}.txt": content.media_plan.target,
        f"media_plan_review_{source}.txt": content.media_plan.source,
        f"market_strategy_{target}.txt": content.market_strategy.target,
        f"market_strategy_review_{source}.txt": content.market_strategy.source,
    }

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, mode="w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, text in documents.items():
            zf.writestr(f"{DOCUMENTS_DIR}/{name}", text)

        for idx, logo in enumerate(content.logos, start=1):
            mime, data = _decode_image(f"logo {idx}", logo)
            zf.writestr(f"{LOGOS_DIR}/logo_concept_{idx}.{extension_for(mime)}", data)

        for name, banner in zip(BANNER_NAMES, content.banners):
            mime, data = _decode_image(name, banner)
            zf.writestr(f"{BANNERS_DIR}/{name}.{extension_for(mime)}", data)

    return buffer.getvalue()


def write_archive(project: "ProjectInput", content: "GeneratedContent", output_dir: Path) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / archive_filename(project.company_name)
    path.write_bytes(build_archive(project, content))
    print(f"📦 Campaign archive written to: {path}")
    return path
