"""Fix rules for SEO audits."""

from typing import Any

from ..lhr import get_text
from ..models import Fix, Priority, Snippet


def meta_description(audit: dict[str, Any]) -> Fix:
    return Fix(
        title="Add Meta Description",
        priority=Priority.HIGH,
        impact="SEO",
        description=get_text(audit, "description"),
        snippets=[Snippet(
            type="html",
            title="Add meta description in head",
            code=(
                "<head>\n"
                '  <meta name="description" content="A clear, compelling description between 50-160 characters.">\n'
                "</head>"
            ),
        )],
    )


def canonical(audit: dict[str, Any]) -> Fix:
    return Fix(
        title="Add Canonical Link",
        priority=Priority.MEDIUM,
        impact="SEO",
        description=get_text(audit, "description"),
        snippets=[Snippet(
            type="html",
            title="Add canonical link element",
            code=(
                "<head>\n"
                '  <link rel="canonical" href="https://example.com/page">\n'
                "</head>"
            ),
        )],
    )


def structured_data(audit: dict[str, Any]) -> Fix:
    return Fix(
        title="Add Valid Structured Data",
        priority=Priority.LOW,
        impact="Rich results in search",
        description=get_text(audit, "description"),
        snippets=[Snippet(
            type="html",
            title="Add JSON-LD Organization schema",
            code=(
                '<script type="application/ld+json">\n'
                "{\n"
                '  "@context": "https://schema.org",\n'
                '  "@type": "Organization",\n'
                '  "name": "Example Inc.",\n'
                '  "url": "https://example.com",\n'
                '  "logo": "https://example.com/logo.png"\n'
                "}\n"
                "</script>"
            ),
        )],
    )
