"""Framework-specific fixes derived from the unused-javascript audit."""

from typing import Any, Optional

from ..lhr import get_audit, get_details, get_items, get_number, get_score, get_text, round_half_up
from ..models import Fix, Priority, Snippet

NEXTJS_CHUNK_PATH = "/_next/static/chunks/"


def nextjs_chunks(lhr: dict[str, Any], threshold: float) -> list[dict[str, Any]]:
    """unused-javascript items served from Next.js chunk paths."""
    audit = get_audit(lhr, "unused-javascript")
    if audit is None:
        return []
    score = get_score(audit)
    if score is None or score >= threshold:
        return []
    return [
        item for item in get_items(get_details(audit))
        if NEXTJS_CHUNK_PATH in get_text(item, "url")
    ]


def nextjs_bundle(chunks: list[dict[str, Any]]) -> Fix:
    total_bytes = sum(get_number(chunk, "wastedBytes") for chunk in chunks)

    return Fix(
        title=f"Optimize Next.js Bundle Size (~{round_half_up(total_bytes / 1024)}KB wasted)",
        priority=Priority.HIGH,
        impact="FCP, LCP, and TBT",
        description="Reduce unused JavaScript in Next.js chunks",
        snippets=[
            Snippet(
                type="bash",
                title="Analyze Bundle Size",
                code="npm install @next/bundle-analyzer\nANALYZE=true npm run build",
            ),
            Snippet(
                type="javascript",
                title="Optimize next.config.js",
                code=(
                    "module.exports = {\n"
                    "  swcMinify: true,\n"
                    "  compiler: {\n"
                    "    removeConsole: process.env.NODE_ENV === 'production'\n"
                    "  }\n"
                    "};"
                ),
            ),
        ],
    )


def check_framework(lhr: dict[str, Any], threshold: float) -> Optional[Fix]:
    chunks = nextjs_chunks(lhr, threshold)
    return nextjs_bundle(chunks) if chunks else None
