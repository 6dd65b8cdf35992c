from modmail.adapters.discord.launcher import main

main()
