"""HTML pages served by the SmartCombo app."""

from __future__ import annotations

from typing import Optional

from flask import render_template_string

_LAYOUT = """<!doctype html>
<html lang="en">
    <head>
        <meta charset="utf-8" />
        <meta name="viewport" content="width=device-width, initial-scale=1" />
        <title>{{ title }} - SmartCombo</title>
        <style>
            :root {
                --bg: #0f172a;
                --panel: #111827;
                --accent: #22c55e;
                --text: #e5e7eb;
                --muted: #94a3b8;
                --error: #ef4444;
            }
            * { box-sizing: border-box; }
            body {
                margin: 0;
                font-family: system-ui, -apple-system, Segoe UI, sans-serif;
                color: var(--text);
                background: var(--bg);
                padding: 24px;
            }
            nav a { color: var(--accent); margin-right: 16px; text-decoration: none; }
            main {
                max-width: 760px;
                margin: 24px auto;
                background: var(--panel);
                border-radius: 16px;
                padding: 24px;
            }
            .error {
                background: rgba(239,68,68,0.15);
                border: 1px solid rgba(239,68,68,0.35);
                color: #fca5a5;
                padding: 12px 14px;
                border-radius: 12px;
            }
            .muted { color: var(--muted); }
            input {
                width: 100%;
                padding: 10px;
                border-radius: 10px;
                border: 1px solid rgba(148,163,184,0.25);
                background: rgba(2,6,23,0.6);
                color: var(--text);
            }
            ul.suggestions { list-style: none; padding: 0; }
            ul.suggestions li { padding: 6px 0; border-bottom: 1px solid rgba(148,163,184,0.15); }
        </style>
    </head>
    <body>
        <nav>
            <a href="{{ url_for('home') }}">Home</a>
            <a href="{{ url_for('smart_paste') }}">Smart Paste</a>
        </nav>
        <main>
            <h1>{{ title }}</h1>
            {{ body | safe }}
        </main>
    </body>
</html>
"""

_HOME = """
{% if config_error %}
<div class="error">
    <strong>Configuration error:</strong> {{ config_error }}
</div>
{% endif %}
<p>Start typing an expense description and pick the closest accounting category.</p>
<label for="category">Accounting category</label>
<input id="category" autocomplete="off" placeholder="e.g. mortgage payment" />
<ul class="suggestions" id="suggestions"></ul>
<script>
    const input = document.getElementById("category");
    const list = document.getElementById("suggestions");
    let timer = null;
    input.addEventListener("input", () => {
        clearTimeout(timer);
        timer = setTimeout(async () => {
            const params = new URLSearchParams({ searchText: input.value, maxResults: "{{ max_results }}" });
            const resp = await fetch("{{ endpoint_path }}?" + params.toString());
            list.innerHTML = "";
            if (!resp.ok) { return; }
            for (const item of await resp.json()) {
                const li = document.createElement("li");
                li.textContent = item.text;
                li.addEventListener("click", () => { input.value = item.text; list.innerHTML = ""; });
                list.appendChild(li);
            }
        }, 150);
    });
</script>
"""

_ERROR = """
<div class="error">An error occurred while processing your request.</div>
{% if show_request_id %}
<p><strong>Request ID:</strong> <code>{{ request_id }}</code></p>
{% endif %}
<p class="muted">Swapping to the development environment will display more detailed information about the error that occurred.</p>
"""

_SMART_PASTE = """
<p>Copy a block of text such as an address or an email signature, then paste it to fill the form.</p>
<form>
    <p><label>Name <input name="name" /></label></p>
    <p><label>Email <input name="email" /></label></p>
    <p><label>Address <input name="address" /></label></p>
</form>
"""


def _render(title: str, body_template: str, **context) -> str:
    body = render_template_string(body_template, **context)
    return render_template_string(_LAYOUT, title=title, body=body)


def render_home(config_error: Optional[str] = None, endpoint_path: str = "", max_results: int = 10) -> str:
    return _render(
        "Home",
        _HOME,
        config_error=config_error,
        endpoint_path=endpoint_path,
        max_results=max_results,
    )


def render_error(request_id: Optional[str] = None) -> str:
    return _render("Error", _ERROR, request_id=request_id, show_request_id=bool(request_id))


def render_smart_paste() -> str:
    return _render("Smart Paste", _SMART_PASTE)
