"""Fix rules for performance audits."""

from typing import Any

from ..lhr import (
    basename,
    format_number,
    get_details,
    get_items,
    get_number,
    get_numeric_value,
    get_text,
    round_half_up,
)
from ..models import Fix, Priority, Snippet

EXTENSION_MARKER = "chrome-extension://"


def diagnose_ttfb(ttfb_ms: float) -> str:
    if ttfb_ms > 1000:
        return "TTFB is critically high (> 1s)"
    elif ttfb_ms > 600:
        return "TTFB is elevated (> 600ms)"
    elif ttfb_ms > 400:
        return "TTFB is moderate (> 400ms)"
    return "TTFB is acceptable"


def diagnose_fid(fid_ms: float) -> str:
    if fid_ms > 200:
        return "FID is critically high (> 200ms)"
    elif fid_ms > 100:
        return "FID needs improvement (> 100ms)"
    elif fid_ms > 50:
        return "FID is acceptable but could be better"
    return "FID is good"


def _kb(num_bytes: float) -> int:
    return round_half_up(num_bytes / 1024)


def server_response_time(audit: dict[str, Any]) -> Fix:
    ttfb_ms = get_numeric_value(audit) or 0

    snippets = []
    if ttfb_ms > 600:
        snippets.append(Snippet(
            type="text",
            title="TTFB Root Cause Analysis",
            code=(
                "1. Check server location & CDN\n"
                "2. Enable CDN caching\n"
                "3. Optimize database queries\n"
                "4. Use edge computing"
            ),
        ))
    snippets.append(Snippet(
        type="bash",
        title="Add Cache Headers",
        code=(
            "# Apache .htaccess\n"
            "<IfModule mod_expires.c>\n"
            "  ExpiresActive On\n"
            '  ExpiresByType text/html "access plus 1 hour"\n'
            "</IfModule>"
        ),
    ))

    return Fix(
        title=f"Reduce Server Response Time (TTFB: {round_half_up(ttfb_ms)}ms)",
        priority=Priority.HIGH,
        impact="All Core Web Vitals - TTFB affects LCP, FCP, and SI",
        description=get_text(audit, "description"),
        diagnosis=diagnose_ttfb(ttfb_ms),
        snippets=snippets,
    )


def _unused_js_analysis(first_party: list[dict[str, Any]], total_bytes: float, total_ms: float) -> str:
    top_wasters = sorted(first_party, key=lambda item: get_number(item, "wastedBytes"), reverse=True)[:5]

    lines = [
        "## Unused JavaScript Details",
        "",
        f"**Total Impact**: {_kb(total_bytes)}KB wasted, {format_number(total_ms)}ms savings",
        "",
        "### Top Wasting Files:",
        "",
    ]
    for i, item in enumerate(top_wasters, 1):
        filename = basename(get_text(item, "url", "unknown"))
        lines.append(f"{i}. **{filename}**")
        lines.append(
            f"   - Wasted: {_kb(get_number(item, 'wastedBytes'))}KB / "
            f"{_kb(get_number(item, 'totalBytes'))}KB"
        )
        lines.append("")
    return "\n".join(lines) + "\n"


def unused_javascript(audit: dict[str, Any]) -> Fix:
    details = get_details(audit)
    items = get_items(details)
    total_ms = get_number(details, "overallSavingsMs")
    # every item counts toward the total, extensions included
    total_bytes = sum(get_number(item, "wastedBytes") for item in items)

    first_party = [item for item in items if EXTENSION_MARKER not in get_text(item, "url")]
    extensions = [item for item in items if EXTENSION_MARKER in get_text(item, "url")]

    snippets = []
    if first_party:
        snippets.append(Snippet(
            type="markdown",
            title="Unused JavaScript Analysis",
            code=_unused_js_analysis(first_party, total_bytes, total_ms),
        ))
        snippets.append(Snippet(
            type="javascript",
            title="Dynamic Imports for Code Splitting",
            code=(
                "// pages/index.js or app/page.js\n"
                "import dynamic from 'next/dynamic';\n"
                "\n"
                "// Lazy load heavy components\n"
                "const HeavyChart = dynamic(() => import('../components/HeavyChart'), {\n"
                "  loading: () => <div>Loading chart...</div>,\n"
                "  ssr: false\n"
                "});"
            ),
        ))

    if extensions:
        names = ", ".join(basename(get_text(item, "url")) for item in extensions)
        snippets.append(Snippet(
            type="text",
            title="Browser Extensions Detected (Can Ignore)",
            code=(
                f"Browser extensions like {names} only affect local development. "
                "Test in incognito mode for accurate production metrics."
            ),
        ))

    return Fix(
        title=(
            f"Reduce Unused JavaScript (~{_kb(total_bytes)}KB wasted, "
            f"{format_number(total_ms)}ms savings)"
        ),
        priority=Priority.HIGH,
        impact="FCP, LCP, and TBT",
        description=get_text(audit, "description"),
        diagnosis=f"{len(first_party)} first-party files with unused code",
        snippets=snippets,
    )


def speed_index(audit: dict[str, Any]) -> Fix:
    return Fix(
        title="Improve Speed Index",
        priority=Priority.MEDIUM,
        impact="Perceived performance",
        description=get_text(audit, "description"),
        snippets=[Snippet(
            type="html",
            title="Add critical CSS inline",
            code=(
                "<head>\n"
                "  <style>body { margin: 0; font-family: system-ui; }</style>\n"
                '  <link rel="preload" href="styles.css" as="style" '
                "onload=\"this.onload=null;this.rel='stylesheet'\">\n"
                "</head>"
            ),
        )],
    )


def lcp_breakdown(audit: dict[str, Any]) -> Fix:
    """LCP breakdown insight: timing subparts plus the LCP element."""
    items = get_items(get_details(audit))
    timing_table = next((item for item in items if item.get("type") == "table"), None)
    lcp_element = next((item for item in items if item.get("type") == "node"), None)

    diagnosis = None
    if timing_table is not None and isinstance(timing_table.get("items"), list):
        ttfb = next(
            (
                sub for sub in get_items(timing_table)
                if sub.get("subpart") == "timeToFirstByte"
            ),
            None,
        )
        ttfb_text = f"{round_half_up(get_number(ttfb, 'duration'))}ms" if ttfb else "N/A"
        diagnosis = f"LCP breakdown: TTFB {ttfb_text}"

    snippets = []
    if lcp_element is not None:
        snippets.append(Snippet(
            type="text",
            title="Optimize LCP Element",
            code=(
                f"LCP Element: {get_text(lcp_element, 'nodeLabel') or 'Unknown'}\n"
                f"Selector: {get_text(lcp_element, 'selector') or 'unknown'}\n"
                "\n"
                "1. Preload the LCP resource\n"
                "2. Reduce CSS on this element\n"
                "3. Ensure element is in initial HTML"
            ),
        ))

    return Fix(
        title="Optimize LCP Breakdown",
        priority=Priority.HIGH,
        impact="LCP metric",
        description=get_text(audit, "description"),
        diagnosis=diagnosis,
        snippets=snippets,
    )


def document_latency(audit: dict[str, Any]) -> Fix:
    # 570ms when the insight reports no savings
    wasted_ms = get_number(get_details(audit), "overallSavingsMs") or 570

    return Fix(
        title=f"Reduce Document Request Latency (~{format_number(wasted_ms)}ms savings)",
        priority=Priority.HIGH,
        impact="All page metrics",
        description=get_text(audit, "description"),
        diagnosis="Initial HTML request is taking too long",
        snippets=[Snippet(
            type="text",
            title="Document Latency Solutions",
            code=(
                "1. Use CDN (Vercel, Netlify, Cloudflare)\n"
                "2. Enable gzip/brotli compression\n"
                "3. Add cache headers\n"
                "4. Use HTTP/2\n"
                "5. Preconnect to origins"
            ),
        )],
    )


def max_potential_fid(audit: dict[str, Any]) -> Fix:
    value = get_numeric_value(audit) or 0

    return Fix(
        title=f"Reduce First Input Delay (FID: {round_half_up(value)}ms)",
        priority=Priority.HIGH if value > 100 else Priority.MEDIUM,
        impact="Interactivity",
        description=get_text(audit, "description"),
        diagnosis=diagnose_fid(value),
        snippets=[Snippet(
            type="text",
            title="Break up long JavaScript tasks",
            code=(
                "- Use requestIdleCallback or setTimeout for chunking\n"
                "- Use Web Workers for CPU-intensive tasks\n"
                "- Defer non-critical JavaScript with dynamic imports"
            ),
        )],
    )


def render_blocking_resources(audit: dict[str, Any]) -> Fix:
    details = get_details(audit)
    items = get_items(details)
    wasted_ms = get_number(details, "overallSavingsMs")
    files = [basename(get_text(item, "url")) for item in items if get_text(item, "url")]

    return Fix(
        title=f"Eliminate Render-Blocking Resources (~{round_half_up(wasted_ms)}ms savings)",
        priority=Priority.HIGH,
        impact="FCP and LCP",
        description=get_text(audit, "description"),
        diagnosis=f"{len(items)} resources block the first paint" + (f": {', '.join(files[:3])}" if files else ""),
        snippets=[
            Snippet(
                type="html",
                title="Defer non-critical scripts",
                code=(
                    "<!-- BEFORE -->\n"
                    '<script src="/js/app.js"></script>\n'
                    "\n"
                    "<!-- AFTER -->\n"
                    '<script src="/js/app.js" defer></script>'
                ),
            ),
            Snippet(
                type="html",
                title="Load non-critical CSS asynchronously",
                code=(
                    '<link rel="preload" href="/css/non-critical.css" as="style" '
                    "onload=\"this.onload=null;this.rel='stylesheet'\">\n"
                    '<noscript><link rel="stylesheet" href="/css/non-critical.css"></noscript>'
                ),
            ),
        ],
    )


def unminified_css(audit: dict[str, Any]) -> Fix:
    details = get_details(audit)

    return Fix(
        title=f"Minify CSS (~{_kb(get_number(details, 'overallSavingsBytes'))}KB savings)",
        priority=Priority.MEDIUM,
        impact="FCP and LCP",
        description=get_text(audit, "description"),
        diagnosis=f"{len(get_items(details))} stylesheets are not minified",
        snippets=[Snippet(
            type="bash",
            title="Minify CSS at build time",
            code=(
                "npm install --save-dev cssnano postcss-cli\n"
                "npx postcss src/styles.css --use cssnano -o dist/styles.min.css"
            ),
        )],
    )


def unminified_javascript(audit: dict[str, Any]) -> Fix:
    details = get_details(audit)

    return Fix(
        title=f"Minify JavaScript (~{_kb(get_number(details, 'overallSavingsBytes'))}KB savings)",
        priority=Priority.MEDIUM,
        impact="FCP, LCP, and TBT",
        description=get_text(audit, "description"),
        diagnosis=f"{len(get_items(details))} scripts are not minified",
        snippets=[Snippet(
            type="bash",
            title="Minify JavaScript with terser",
            code=(
                "npm install --save-dev terser\n"
                "npx terser src/app.js --compress --mangle -o dist/app.min.js"
            ),
        )],
    )


def unused_css_rules(audit: dict[str, Any]) -> Fix:
    details = get_details(audit)

    return Fix(
        title=f"Reduce Unused CSS (~{_kb(get_number(details, 'overallSavingsBytes'))}KB wasted)",
        priority=Priority.MEDIUM,
        impact="FCP and LCP",
        description=get_text(audit, "description"),
        diagnosis=f"{len(get_items(details))} stylesheets contain unused rules",
        snippets=[Snippet(
            type="javascript",
            title="Purge unused styles (Tailwind)",
            code=(
                "// tailwind.config.js\n"
                "module.exports = {\n"
                "  content: ['./src/**/*.{html,js,jsx,ts,tsx}'],\n"
                "};"
            ),
        )],
    )


def modern_image_formats(audit: dict[str, Any]) -> Fix:
    details = get_details(audit)

    return Fix(
        title=f"Serve Images in Modern Formats (~{_kb(get_number(details, 'overallSavingsBytes'))}KB savings)",
        priority=Priority.MEDIUM,
        impact="LCP",
        description=get_text(audit, "description"),
        diagnosis=f"{len(get_items(details))} images could use WebP or AVIF",
        snippets=[Snippet(
            type="html",
            title="Use <picture> with AVIF/WebP fallbacks",
            code=(
                "<picture>\n"
                '  <source srcset="/img/hero.avif" type="image/avif">\n'
                '  <source srcset="/img/hero.webp" type="image/webp">\n'
                '  <img src="/img/hero.jpg" alt="Hero image" width="1200" height="600">\n'
                "</picture>"
            ),
        )],
    )


def offscreen_images(audit: dict[str, Any]) -> Fix:
    details = get_details(audit)

    return Fix(
        title=f"Defer Offscreen Images (~{_kb(get_number(details, 'overallSavingsBytes'))}KB savings)",
        priority=Priority.MEDIUM,
        impact="LCP and TBT",
        description=get_text(audit, "description"),
        diagnosis=f"{len(get_items(details))} images below the fold load eagerly",
        snippets=[Snippet(
            type="html",
            title="Lazy load offscreen images",
            code='<img src="/img/gallery-1.jpg" alt="Gallery photo" loading="lazy" width="600" height="400">',
        )],
    )


def uses_optimized_images(audit: dict[str, Any]) -> Fix:
    details = get_details(audit)

    return Fix(
        title=f"Efficiently Encode Images (~{_kb(get_number(details, 'overallSavingsBytes'))}KB savings)",
        priority=Priority.MEDIUM,
        impact="LCP",
        description=get_text(audit, "description"),
        diagnosis=f"{len(get_items(details))} images can be compressed further",
        snippets=[Snippet(
            type="bash",
            title="Compress images",
            code=(
                "npm install --save-dev sharp-cli\n"
                "npx sharp -i 'src/img/*.jpg' -o dist/img/ --quality 80"
            ),
        )],
    )


def document_title(audit: dict[str, Any]) -> Fix:
    return Fix(
        title="Add Document Title",
        priority=Priority.HIGH,
        impact="SEO and accessibility",
        description=get_text(audit, "description"),
        snippets=[Snippet(
            type="html",
            title="Add a <title> element",
            code=(
                "<head>\n"
                "  <title>Page Topic | Site Name</title>\n"
                "</head>"
            ),
        )],
    )
