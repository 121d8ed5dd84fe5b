"""Document builders shared by the test modules."""


def section(name: str, body: str) -> str:
    """Render one SECTION header block followed by its body."""
    return f"=====\nSECTION: {name}\n=====\n{body}\n\n"
