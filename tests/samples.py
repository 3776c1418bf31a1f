SQUARE = "\n".join([".....", ".S-7.", ".|.|.", ".L-J.", "....."])
SQUARE_CLUTTERED = "\n".join(["-L|F7", "7S-7|", "L|7||", "-L-J|", "L|-JF"])
WINDING = "\n".join(["..F7.", ".FJ|.", "SJ.L7", "|F--J", "LJ..."])
WINDING_CLUTTERED = "\n".join(["7-F7-", ".FJ|7", "SJLL7", "|F--J", "LJ.LJ"])
TINY = "S7\nLJ"
