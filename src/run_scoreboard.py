#!/usr/bin/env python

from icpc_scoreboard.app import main


if __name__ == "__main__":
    main()
