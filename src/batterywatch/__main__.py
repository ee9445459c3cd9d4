from batterywatch.cli import app

app()
