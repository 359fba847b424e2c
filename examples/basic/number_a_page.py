"""Number a page whose header mentions a footnote before the body does."""

from tallymark import ContentEntry, DeferredFootnote, FootnoteManager, render_footnote_ref

page = FootnoteManager.create_for_page(
    content=[
        ContentEntry(slug="intro", body='Islands<FootnoteRef id="islands" /> ship less JS.'),
        ContentEntry(slug="details", body='Hydration<FootnoteRef id="hydration" /> is lazy.'),
    ],
    deferred_footnotes=[DeferredFootnote(id="hydration")],
)

print("<header>See note " + render_footnote_ref("hydration", deferred=True) + "</header>")
for rendered in page.rendered_content:
    print(rendered.html)
print(page.deferred_mappings)
