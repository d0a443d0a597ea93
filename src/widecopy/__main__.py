from widecopy.cli import main

main()
