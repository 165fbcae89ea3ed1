"""
Services Layer

Read-only query services that:
- Accept domain inputs (ids, slugs, key sets)
- Return domain outputs (row models, dicts, menu trees)
- Do NOT depend on HTTP request/response objects
- Never write to the database
"""
