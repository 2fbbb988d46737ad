from ora2ch.cli import main

main()
