from markdown_it import MarkdownIt

# Raw HTML in model output is escaped; unsafe link schemes (javascript:, vbscript:, ...) are not linked.
_md = MarkdownIt("commonmark", {"html": False, "typographer": False})


def render_markdown(text: str) -> str:
    """Render assistant Markdown to HTML that is safe to inject into the page."""
    return _md.render(text or "")
