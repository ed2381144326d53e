from clipbot.main import main

main()
