from .scripts.run_collector import main

main()
