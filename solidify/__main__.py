from solidify.cli import app

app(prog_name="solidify")
