# -*- coding: utf-8 -*-

"""
Main entry point for the Tree Transfer toolkit.

Builds the transfer controller from the packaged seed and applies the moves
given on the command line, e.g. ``python run.py right:node1-3 up:node2-2``.
Actions: ``right:ID`` / ``left:ID`` transfer a subtree, ``up:ID`` /
``down:ID`` reorder the node in whichever pane holds it.
"""

import sys
import logging

from tree_transfer.logging_config import setup_logging
from tree_transfer import TransferController


def main(argv=None):
    """
    Configure logging, build the panes and apply the requested actions.
    """
    setup_logging()
    controller = TransferController.from_config()

    for arg in (sys.argv[1:] if argv is None else argv):
        action, _, node_id = arg.partition(":")
        if action in ("right", "left"):
            result = controller.move_to_right(node_id) if action == "right" else controller.move_to_left(node_id)
        elif action in ("up", "down"):
            if not controller.select_left(node_id):
                controller.select_right(node_id)
            result = controller.move_up() if action == "up" else controller.move_down()
        else:
            print(f"Unknown action '{arg}'")
            continue
        print(f"{arg}: {result.message}")

    print("left: ", ", ".join(controller.left_list))
    print("right:", ", ".join(controller.right_list))
    print(controller.left_html)
    print(controller.right_html)


if __name__ == '__main__':
    main()

    logging.info("===== Application terminated =====")
