from dd_switch.run import main

main()
