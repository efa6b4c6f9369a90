from rsfmt.cli import app

app()
