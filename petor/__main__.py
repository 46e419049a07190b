from petor.cli import main

main()
