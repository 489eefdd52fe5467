"""
Pair list I/O

Text format, one line per view with at least one partner:
    <view_id> <partner_id> <partner_id> ...
Partners are the larger ids of each pair, in ascending order.
"""

from collections import defaultdict
from pathlib import Path
from typing import Dict, List, Set, Tuple, Union

from ..logger import get_logger


logger = get_logger("pairs")


def write_pairs(pairs: Set[Tuple[int, int]], filename: Union[str, Path]) -> bool:
    """
    Write a pair set to a text file.

    Args:
        pairs: Unordered view id pairs
        filename: Destination path

    Returns:
        True on success, False if the file could not be written
    """
    grouped: Dict[int, List[int]] = defaultdict(list)
    for i, j in pairs:
        first, second = (i, j) if i < j else (j, i)
        grouped[first].append(second)

    try:
        with open(filename, 'w') as f:
            for first in sorted(grouped):
                partners = " ".join(str(v) for v in sorted(set(grouped[first])))
                f.write(f"{first} {partners}\n")
    except OSError as e:
        logger.error(f"Could not write pairs to {filename}: {e}")
        return False

    logger.info(f"Wrote {len(pairs)} pairs to {filename}")
    return True


def read_pairs(filename: Union[str, Path]) -> Set[Tuple[int, int]]:
    """
    Read a pair file written by write_pairs.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If a line contains non-integer ids or a self pair
    """
    filename = Path(filename)
    if not filename.exists():
        raise FileNotFoundError(f"Pair file not found: {filename}")

    pairs: Set[Tuple[int, int]] = set()
    with open(filename, 'r') as f:
        for line_no, line in enumerate(f, 1):
            tokens = line.split()
            if not tokens:
                continue
            try:
                ids = [int(t) for t in tokens]
            except ValueError:
                raise ValueError(f"{filename}:{line_no}: invalid view id in '{line.strip()}'")
            first = ids[0]
            for other in ids[1:]:
                if other == first:
                    raise ValueError(f"{filename}:{line_no}: self pair ({first}, {first})")
                pairs.add((min(first, other), max(first, other)))
    return pairs
