from ddns6.main import run

run()
