from kubereport.cli import main

main()
