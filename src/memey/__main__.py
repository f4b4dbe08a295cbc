from memey.app import main

main()
