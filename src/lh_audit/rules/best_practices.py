"""Fix rules for best-practices audits."""

from typing import Any

from ..lhr import get_details, get_items, get_text
from ..models import Fix, Priority, Snippet


def errors_in_console(audit: dict[str, Any]) -> Fix:
    items = get_items(get_details(audit))

    lines = []
    for item in items:
        line = f"- {get_text(item, 'description')}"
        location = item.get("sourceLocation")
        url = get_text(location, "url") if isinstance(location, dict) else ""
        if url:
            line += f"\n  URL: {url[:80]}"
        lines.append(line)

    first = get_text(items[0], "description") if items else ""

    return Fix(
        title=f"Fix Console Errors ({len(items)} errors)",
        priority=Priority.MEDIUM,
        impact="User experience",
        description=get_text(audit, "description"),
        diagnosis=first or "Console errors detected",
        snippets=[Snippet(
            type="text",
            title="Error Analysis",
            code="\n".join(lines) or "- No error details in report",
        )],
    )


def valid_source_maps(audit: dict[str, Any]) -> Fix:
    items = get_items(get_details(audit))

    return Fix(
        title=f"Fix Missing Source Maps ({len(items)} files)",
        priority=Priority.LOW,
        impact="Debugging (not production)",
        description=get_text(audit, "description"),
        diagnosis=f"{len(items)} JavaScript files missing source maps",
        snippets=[Snippet(
            type="bash",
            title="Enable source maps in Next.js",
            code=(
                "# next.config.js\n"
                "module.exports = {\n"
                "  productionBrowserSourceMaps: true\n"
                "};\n"
                "\n"
                "npm run build"
            ),
        )],
    )


def bf_cache(audit: dict[str, Any]) -> Fix:
    items = get_items(get_details(audit))

    return Fix(
        title="Enable Back/Forward Cache",
        priority=Priority.MEDIUM,
        impact="Navigation performance",
        description=get_text(audit, "description"),
        diagnosis=f"{len(items)} issues preventing bfcache",
        snippets=[Snippet(
            type="text",
            title="bfcache Solutions",
            code=(
                "- Remove Cache-Control: no-store header\n"
                "- Avoid beforeunload/unload event listeners\n"
                "- Use pagehide event instead\n"
                "- Avoid fetch() with cache: no-store"
            ),
        )],
    )


def viewport(audit: dict[str, Any]) -> Fix:
    return Fix(
        title="Add a Viewport Meta Tag",
        priority=Priority.HIGH,
        impact="Mobile usability and INP",
        description=get_text(audit, "description"),
        snippets=[Snippet(
            type="html",
            title="Add viewport meta tag in head",
            code=(
                "<head>\n"
                '  <meta name="viewport" content="width=device-width, initial-scale=1">\n'
                "</head>"
            ),
        )],
    )


def http_status_code(audit: dict[str, Any]) -> Fix:
    return Fix(
        title="Return a Successful HTTP Status Code",
        priority=Priority.HIGH,
        impact="Indexing and SEO",
        description=get_text(audit, "description"),
        diagnosis="Page responded with an unsuccessful HTTP status code",
        snippets=[Snippet(
            type="bash",
            title="Check the response status",
            code=(
                "curl -sI https://example.com/page | head -n 1\n"
                "# Expect: HTTP/2 200"
            ),
        )],
    )


def no_vulnerable_libraries(audit: dict[str, Any]) -> Fix:
    items = get_items(get_details(audit))

    libraries = []
    for item in items:
        lib = item.get("detectedLib")
        name = get_text(lib, "text") if isinstance(lib, dict) else ""
        if name:
            severity = get_text(item, "highestSeverity")
            libraries.append(f"- {name}" + (f" (highest severity: {severity})" if severity else ""))

    snippets = []
    if libraries:
        snippets.append(Snippet(
            type="text",
            title="Vulnerable Libraries",
            code="\n".join(libraries),
        ))
    snippets.append(Snippet(
        type="bash",
        title="Audit and upgrade dependencies",
        code="npm audit\nnpm audit fix",
    ))

    return Fix(
        title=f"Upgrade Vulnerable JavaScript Libraries ({len(items)} detected)",
        priority=Priority.HIGH,
        impact="Security",
        description=get_text(audit, "description"),
        diagnosis=f"{len(items)} front-end libraries with known vulnerabilities",
        snippets=snippets,
    )
