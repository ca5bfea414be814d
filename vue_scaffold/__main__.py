from vue_scaffold.pipeline import main

main()
