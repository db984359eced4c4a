from gitpr.main import run

run()
