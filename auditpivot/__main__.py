from .runner import app

app(prog_name="audit-pivot")
