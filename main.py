import argparse
from collections import Counter

from subgroups import all_subgroups, EnumConfig, BACKENDS, CLOSURES, DEFAULT_WORKERS, DEFAULT_QUEUE_SIZE, DEFAULT_ARITY
from utils import get_logger, tf

def main(args):
    logger = get_logger(args.logfile)
    logger.info('args: {}'.format(args))
    config = EnumConfig(
        workers=args.workers,
        queue_size=args.queue_size,
        arity=args.arity,
        backend=args.backend,
        closure=args.closure,
        progress=args.progress,
    )
    result = tf(all_subgroups, [args.n, config])

    for subgroup in sorted(result, key=lambda s: (s.order, s)):
        print('order {:4d} | {}'.format(subgroup.order, subgroup))

    print('=' * 80)
    print('{} subgroups of S_{}'.format(len(result), args.n))
    for order, cnt in sorted(Counter(s.order for s in result).items()):
        print('order {:4d}: {}'.format(order, cnt))

if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Enumerate the subgroups of the symmetric group S_n')
    parser.add_argument('--n', type=int, default=3)
    parser.add_argument('--workers', type=int, default=DEFAULT_WORKERS, help='Amount of parallelism')
    parser.add_argument('--queue_size', type=int, default=DEFAULT_QUEUE_SIZE)
    parser.add_argument('--arity', type=int, default=DEFAULT_ARITY, help='generators per tuple')
    parser.add_argument('--backend', type=str, default='process', choices=BACKENDS)
    parser.add_argument('--closure', type=str, default='fixpoint', choices=sorted(CLOSURES))
    parser.add_argument('--progress', action='store_true')
    parser.add_argument('--logfile', type=str, default=None)
    args = parser.parse_args()
    main(args)
