import logging
import os
import time
from functools import reduce
import psutil

log = logging.getLogger(__name__)

def get_logger(fname=None, stream=True, level=logging.INFO):
    str_fmt = '[%(asctime)s.%(msecs)03d] %(levelname)s %(module)s: %(message)s'
    date_fmt = "%Y-%m-%d %H:%M:%S"
    handlers = []
    if fname is not None:
        handlers.append(logging.FileHandler(filename=fname))
    if stream:
        handlers.append(logging.StreamHandler())

    logging.basicConfig(
        level=level,
        format=str_fmt,
        datefmt=date_fmt,
        handlers=handlers)

    logger = logging.getLogger(__name__)
    return logger

def check_memory(verbose=True):
    # return the memory usage in MB
    process = psutil.Process(os.getpid())
    mem = process.memory_info()[0] / float(2 ** 20)
    if verbose:
        log.info("Consumed {:.2f}mb memory".format(mem))
    return mem

def gcd(a, b):
    while b:
        a, b = b, a%b
    return a

def _lcm(a, b):
    return a*b // gcd(a, b)

def lcm(*args):
    return reduce(_lcm, args, 1)

def tf(f, args=None):
    if args is None:
        args = []

    start = time.time()
    feval = f(*args)
    end = time.time()
    log.info('Running {} | time {:.2f}s'.format(f.__name__, end - start))
    return feval
