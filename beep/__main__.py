from beep.main import main


main()
