from httpsh.app import main

main()
