from specimport.app import main

main()
