from dropsearch.cli import main

main()
