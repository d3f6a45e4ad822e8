"""python -m printbot 실행 진입점"""

from printbot.main import main

if __name__ == "__main__":
    main()
