from albumstore.main import run

run()
