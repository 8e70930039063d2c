from modextract.cli import main

main()
