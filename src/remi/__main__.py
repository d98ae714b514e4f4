from remi.cli import app

app(prog_name="remi")
