from elevate_stats.main import main

if __name__ == "__main__":
    main()
