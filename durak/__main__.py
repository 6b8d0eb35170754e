from durak.cli import run

run()
