from legosigno.cli import main

main()
