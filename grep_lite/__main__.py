from grep_lite.cli import run

if __name__ == "__main__":
    run()
