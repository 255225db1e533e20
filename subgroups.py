import logging
import os
import queue
import threading
import traceback
from collections import namedtuple
from itertools import product
from multiprocessing import Process, Queue
from tqdm import tqdm

from group import elements, make_subset, generate_fixpoint, generate
from utils import check_memory

log = logging.getLogger(__name__)

DEFAULT_WORKERS = 8
DEFAULT_QUEUE_SIZE = 1024
DEFAULT_ARITY = 3
BACKENDS = ('process', 'thread')
CLOSURES = {
    'fixpoint': generate_fixpoint,
    'bfs': generate,
}

class WorkerError(RuntimeError):
    pass

_EnumConfig = namedtuple('EnumConfig', ['workers', 'queue_size', 'arity', 'backend', 'closure', 'progress'])

class EnumConfig(_EnumConfig):
    '''
    workers: number of workers, 0 runs everything in the calling thread
    queue_size: capacity of each worker's inbound queue
    arity: number of generators per tuple
    backend: 'process' or 'thread'
    closure: 'fixpoint' or 'bfs', see CLOSURES
    progress: show a tqdm bar while dispatching
    '''
    __slots__ = ()

    def __new__(cls, workers=DEFAULT_WORKERS, queue_size=DEFAULT_QUEUE_SIZE, arity=DEFAULT_ARITY,
                backend='process', closure='fixpoint', progress=False):
        if workers < 0:
            raise ValueError('workers must be >= 0, got {}'.format(workers))
        if queue_size < 1:
            raise ValueError('queue_size must be >= 1, got {}'.format(queue_size))
        if arity < 1:
            raise ValueError('arity must be >= 1, got {}'.format(arity))
        if backend not in BACKENDS:
            raise ValueError('Unknown backend {!r}, expected one of {}'.format(backend, BACKENDS))
        if closure not in CLOSURES:
            raise ValueError('Unknown closure {!r}, expected one of {}'.format(closure, sorted(CLOSURES)))
        return super().__new__(cls, workers, queue_size, arity, backend, closure, progress)

    @classmethod
    def from_env(cls, environ=None):
        environ = os.environ if environ is None else environ
        env_fields = [
            ('workers', 'SUBGROUP_WORKERS', int),
            ('queue_size', 'SUBGROUP_QUEUE_SIZE', int),
            ('arity', 'SUBGROUP_ARITY', int),
            ('backend', 'SUBGROUP_BACKEND', str),
            ('closure', 'SUBGROUP_CLOSURE', str),
        ]
        kwargs = {}
        for field, key, conv in env_fields:
            if key in environ:
                kwargs[field] = conv(environ[key])
        return cls(**kwargs)


def close_tuple(elems, idx, close):
    '''
    elems: sequence of Perm objects
    idx: tuple of indices into elems
    close: closure function, Subset -> Subgroup
    '''
    return close(make_subset([elems[i] for i in idx]))

def _subgroup_worker(wid, elems, inbox, outbox, closure):
    close = CLOSURES[closure]
    found = set()
    error = None

    # keep draining after a failure so the producer never blocks on a full queue
    for idx in iter(inbox.get, None):
        if error is not None:
            continue
        try:
            found.add(close_tuple(elems, idx, close))
        except Exception:
            error = traceback.format_exc()

    outbox.put((wid, found, error))

def _serial_subgroups(elems, config):
    close = CLOSURES[config.closure]
    found = set()
    tuples = product(range(len(elems)), repeat=config.arity)
    for idx in tqdm(tuples, total=len(elems) ** config.arity, disable=not config.progress):
        found.add(close_tuple(elems, idx, close))
    return found

def all_subgroups(size, config=None):
    '''
    size: int, n > 1
    config: EnumConfig, defaults to EnumConfig.from_env()
    Returns the set of distinct Subgroups of S_n generated by some config.arity-tuple
    of its elements.
    '''
    if config is None:
        config = EnumConfig.from_env()

    elems = elements(size).elements
    total = len(elems) ** config.arity
    log.info('Enumerating subgroups of S_{} | {} generator tuples | {} {} workers'.format(
        size, total, config.workers, config.backend))

    if config.workers == 0:
        result = _serial_subgroups(elems, config)
        log.info('Found {} subgroups | mem usg: {:.2f}mb'.format(len(result), check_memory(verbose=False)))
        return result

    if config.backend == 'process':
        make_queue, make_worker = Queue, Process
    else:
        make_queue, make_worker = queue.Queue, threading.Thread

    outbox = make_queue()
    inboxes = [make_queue(config.queue_size) for _ in range(config.workers)]
    workers = []
    for wid, inbox in enumerate(inboxes):
        w = make_worker(target=_subgroup_worker, args=(wid, elems, inbox, outbox, config.closure))
        w.daemon = True
        workers.append(w)

    for w in workers:
        w.start()

    try:
        tuples = product(range(len(elems)), repeat=config.arity)
        for cnt, idx in enumerate(tqdm(tuples, total=total, disable=not config.progress)):
            inboxes[cnt % config.workers].put(idx)
    finally:
        for inbox in inboxes:
            inbox.put(None)

    # drain the outbox before joining, a process won't exit with unflushed queue data
    result = set()
    errors = []
    for _ in range(config.workers):
        wid, found, error = outbox.get()
        log.debug('Worker {} done | {} subgroups'.format(wid, len(found)))
        if error is not None:
            errors.append((wid, error))
        result |= found

    for w in workers:
        w.join()

    if errors:
        wid, error = errors[0]
        raise WorkerError('{} worker(s) failed, first failure in worker {}:\n{}'.format(len(errors), wid, error))

    log.info('Found {} subgroups | mem usg: {:.2f}mb'.format(len(result), check_memory(verbose=False)))
    return result
