from track_skipper.main import run

run()
