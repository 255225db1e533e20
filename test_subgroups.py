import unittest
from collections import Counter
from unittest import mock
from perm import identity
import subgroups
from subgroups import all_subgroups, EnumConfig, WorkerError
from group import elements, trivial

S3_ORDERS = {1: 1, 2: 3, 3: 1, 6: 1}

class TestEnumConfig(unittest.TestCase):
    def test_defaults(self):
        config = EnumConfig()
        self.assertEqual(config.workers, 8)
        self.assertEqual(config.arity, 3)
        self.assertEqual(config.backend, 'process')
        self.assertEqual(config.closure, 'fixpoint')

    def test_invalid(self):
        for kwargs in [{'workers': -1}, {'queue_size': 0}, {'arity': 0},
                       {'backend': 'gpu'}, {'closure': 'magic'}]:
            with self.assertRaises(ValueError):
                EnumConfig(**kwargs)

    def test_from_env(self):
        env = {'SUBGROUP_WORKERS': '2', 'SUBGROUP_BACKEND': 'thread', 'SUBGROUP_ARITY': '2'}
        config = EnumConfig.from_env(env)
        self.assertEqual(config, EnumConfig(workers=2, backend='thread', arity=2))
        self.assertEqual(EnumConfig.from_env({}), EnumConfig())
        with self.assertRaises(ValueError):
            EnumConfig.from_env({'SUBGROUP_WORKERS': 'lots'})


class TestAllSubgroups(unittest.TestCase):
    def check_s3(self, result):
        self.assertIn(trivial(3), result)
        self.assertIn(elements(3), result)
        self.assertEqual(len(result), 6)
        self.assertEqual(len(set(sorted(result))), len(result))
        self.assertEqual(dict(Counter(s.order for s in result)), S3_ORDERS)

    def test_serial(self):
        self.check_s3(all_subgroups(3, EnumConfig(workers=0)))

    def test_threads(self):
        self.check_s3(all_subgroups(3, EnumConfig(workers=4, queue_size=2, backend='thread')))

    def test_processes(self):
        self.check_s3(all_subgroups(3, EnumConfig(workers=2)))

    def test_deterministic(self):
        configs = [
            EnumConfig(workers=0),
            EnumConfig(workers=1, backend='thread'),
            EnumConfig(workers=8, backend='thread'),
            EnumConfig(workers=3, backend='thread', closure='bfs'),
            EnumConfig(workers=3),
        ]
        results = [all_subgroups(3, c) for c in configs]
        for res in results[1:]:
            self.assertEqual(res, results[0])
        self.assertEqual(all_subgroups(3, configs[2]), all_subgroups(3, configs[2]))

    def test_arity(self):
        # a single generator only reaches the cyclic subgroups
        cyclic = all_subgroups(3, EnumConfig(workers=2, backend='thread', arity=1))
        self.assertEqual(dict(Counter(s.order for s in cyclic)), {1: 1, 2: 3, 3: 1})
        self.assertEqual(all_subgroups(2, EnumConfig(workers=0, arity=1)), {trivial(2), elements(2)})

    def test_s4(self):
        result = all_subgroups(4, EnumConfig(workers=0, arity=2))
        self.assertEqual(len(result), 30)
        self.assertEqual(Counter(s.order for s in result)[4], 7)

    def test_worker_failure(self):
        def boom(generators):
            raise RuntimeError('boom')

        with mock.patch.dict(subgroups.CLOSURES, {'fixpoint': boom}):
            with self.assertRaises(WorkerError):
                all_subgroups(3, EnumConfig(workers=3, queue_size=1, backend='thread'))

if __name__ == '__main__':
    unittest.main()
