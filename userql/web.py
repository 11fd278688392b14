"""HTML test console served from ``GET /graphql``."""

from __future__ import annotations

import html
import json
from typing import Iterable, Tuple

EXAMPLE_QUERIES: Tuple[Tuple[str, str], ...] = (
    ("List users", "query {\n  users {\n    id\n    name\n    email\n    createdAt\n  }\n}"),
    ("Fetch one user", 'query {\n  user(id: "1") {\n    id\n    name\n    email\n    createdAt\n  }\n}'),
    ("Greeting", "query {\n  hello\n}"),
    (
        "Create a user",
        'mutation {\n  createUser(name: "Ada Lovelace", email: "ada@example.com") {\n'
        "    id\n    name\n    email\n    createdAt\n  }\n}",
    ),
    (
        "Create a user with variables",
        "mutation CreateUser($name: String!, $email: String!) {\n"
        "  createUser(name: $name, email: $email) {\n    id\n    name\n    email\n  }\n}",
    ),
)

_PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>{title}</title>
  <style>
    body {{ font-family: system-ui, sans-serif; padding: 20px; background: #f4f4f9; max-width: 860px; margin: 0 auto; }}
    textarea {{ width: 100%; height: 160px; margin: 10px 0; padding: 10px; border-radius: 5px; border: 1px solid #ccc; font-family: monospace; }}
    button {{ background: #007bff; color: #fff; border: none; padding: 10px 20px; border-radius: 5px; cursor: pointer; }}
    pre {{ background: #2d2d2d; color: #f8f8f2; padding: 15px; border-radius: 5px; overflow: auto; }}
    .endpoint {{ font-family: monospace; background: #e8f4f8; padding: 6px 10px; border-radius: 4px; margin-bottom: 6px; }}
  </style>
</head>
<body>
  <h1>{title}</h1>
  <div class="endpoint">POST {endpoint} - queries and mutations</div>
  <div class="endpoint">GET /health - liveness probe with storage status</div>
  <h2>Examples</h2>
  {examples}
  <h2>Try it</h2>
  <textarea id="query">{initial_query}</textarea>
  <textarea id="variables" placeholder='Variables as JSON, e.g. {{"name": "Ada", "email": "ada@example.com"}}'></textarea>
  <button onclick="run()">Run</button>
  <pre id="result"></pre>
  <script>
    async function run() {{
      const query = document.getElementById('query').value;
      const rawVariables = document.getElementById('variables').value.trim();
      const result = document.getElementById('result');
      result.innerText = 'Loading...';
      try {{
        const variables = rawVariables ? JSON.parse(rawVariables) : {{}};
        const response = await fetch({endpoint_js}, {{
          method: 'POST',
          headers: {{ 'Content-Type': 'application/json' }},
          body: JSON.stringify({{ query, variables }})
        }});
        result.innerText = JSON.stringify(await response.json(), null, 2);
      }} catch (error) {{
        result.innerText = 'Error: ' + error.message;
      }}
    }}
  </script>
</body>
</html>
"""


def _render_examples(examples: Iterable[Tuple[str, str]]) -> str:
    blocks = []
    for label, query in examples:
        blocks.append(f"<h3>{html.escape(label)}</h3>\n  <pre><code>{html.escape(query)}</code></pre>")
    return "\n  ".join(blocks)


def render_console(endpoint: str = "/graphql", *, title: str = "userql Playground") -> str:
    """Return the console page that posts queries to *endpoint*."""

    return _PAGE_TEMPLATE.format(
        title=html.escape(title),
        endpoint=html.escape(endpoint),
        endpoint_js=json.dumps(endpoint),
        examples=_render_examples(EXAMPLE_QUERIES),
        initial_query=html.escape(EXAMPLE_QUERIES[0][1]),
    )


__all__ = ["EXAMPLE_QUERIES", "render_console"]
