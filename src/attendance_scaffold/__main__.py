from .cli import app

app(prog_name="attendance-scaffold")
