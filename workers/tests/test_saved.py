# workers/tests/test_saved.py
from unittest.mock import patch

from core.domain import EmployerProfile
from core.exceptions import TransientStoreError
from core.tests.test_base import T0, MemoryStoreTestCase
from workers import saved
from workers.saved import SavedWorkerManager

from .test_filters import make_worker


class SavedWorkerScenarioTest(MemoryStoreTestCase):

    def setUp(self):
        super().setUp()
        self.store.employers['e1'] = EmployerProfile(id='e1', user_id='ue1', company_name='Growth Labs')
        for worker_id in ('w1', 'w2', 'w3'):
            self.store.workers[worker_id] = make_worker(worker_id, last_active=T0)

    async def test_save_list_unsave(self):
        await saved.save(self.store, 'e1', 'w3')
        self.assertIn('w3', {w.id for w in await saved.list_saved(self.store, 'e1')})
        self.assertTrue(await saved.is_saved(self.store, 'e1', 'w3'))

        await saved.unsave(self.store, 'e1', 'w3')
        self.assertNotIn('w3', {w.id for w in await saved.list_saved(self.store, 'e1')})
        self.assertFalse(await saved.is_saved(self.store, 'e1', 'w3'))

    async def test_save_twice_keeps_one_row(self):
        await saved.save(self.store, 'e1', 'w1')
        await saved.save(self.store, 'e1', 'w1')
        self.assertEqual(len(await self.store.list_saved('e1')), 1)
        self.assertTrue(await saved.is_saved(self.store, 'e1', 'w1'))

    async def test_unsave_never_saved_is_noop(self):
        await saved.unsave(self.store, 'e1', 'w2')
        self.assertEqual(await self.store.list_saved('e1'), [])


class SavedWorkerManagerTest(MemoryStoreTestCase):

    def setUp(self):
        super().setUp()
        self.store.employers['e1'] = EmployerProfile(id='e1', user_id='ue1', company_name='Growth Labs')
        for worker_id in ('w1', 'w2'):
            self.store.workers[worker_id] = make_worker(worker_id, last_active=T0)
        self.manager = SavedWorkerManager(self.store, 'e1')

    async def test_mirror_follows_writes(self):
        await self.manager.save('w1')
        await self.manager.save('w1')
        self.assertTrue(self.manager.is_saved('w1'))
        self.assertEqual(self.manager.saved_ids, frozenset({'w1'}))
        self.assertEqual({w.id for w in await self.manager.list_saved()}, {'w1'})

        await self.manager.unsave('w1')
        await self.manager.unsave('w2')
        self.assertFalse(self.manager.is_saved('w1'))
        self.assertEqual(await self.store.list_saved('e1'), [])

    async def test_reload_picks_up_rows_saved_elsewhere(self):
        await self.store.add_saved('e1', 'w2')
        self.assertFalse(self.manager.is_saved('w2'))
        await self.manager.reload()
        self.assertTrue(self.manager.is_saved('w2'))

    async def test_conflict_from_store_counts_as_saved(self):
        await self.store.add_saved('e1', 'w1')
        await self.manager.save('w1')
        self.assertTrue(self.manager.is_saved('w1'))

    async def test_save_restores_row_removed_elsewhere(self):
        await self.manager.save('w1')
        await self.store.remove_saved('e1', 'w1')
        await self.manager.save('w1')
        self.assertEqual([row.worker_id for row in await self.store.list_saved('e1')], ['w1'])
        self.assertTrue(self.manager.is_saved('w1'))

    async def test_failed_resave_keeps_existing_mirror_entry(self):
        await self.manager.save('w1')
        with patch.object(self.store, 'add_saved', side_effect=TransientStoreError(detail='timeout')):
            with self.assertRaises(TransientStoreError):
                await self.manager.save('w1')
        self.assertTrue(self.manager.is_saved('w1'))

    async def test_failed_save_rolls_back_mirror(self):
        with patch.object(self.store, 'add_saved', side_effect=TransientStoreError(detail='timeout')):
            with self.assertRaises(TransientStoreError):
                await self.manager.save('w1')
        self.assertFalse(self.manager.is_saved('w1'))

    async def test_failed_unsave_restores_mirror(self):
        await self.manager.save('w1')
        with patch.object(self.store, 'remove_saved', side_effect=TransientStoreError(detail='timeout')):
            with self.assertRaises(TransientStoreError):
                await self.manager.unsave('w1')
        self.assertTrue(self.manager.is_saved('w1'))
        self.assertEqual(len(await self.store.list_saved('e1')), 1)

    async def test_deleted_workers_are_skipped(self):
        await self.manager.save('w1')
        await self.manager.save('w2')
        del self.store.workers['w2']
        self.assertEqual({w.id for w in await self.manager.list_saved()}, {'w1'})
