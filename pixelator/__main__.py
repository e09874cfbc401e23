from pixelator.cli import app

app(prog_name="pixelator")
