# objmesh/multithread/task_pool.py
# ---------------------------------------------------------------
# Простой пул задач на основе concurrent.futures.
# Геометрии независимы друг от друга, поэтому их конвертацию
# можно раскидать по потокам (numpy/numba отпускают GIL).
# ---------------------------------------------------------------

from concurrent.futures import ThreadPoolExecutor
import queue


class TaskPool:
    """Пул готового количества потоков; задачи принимаются как callables."""
    def __init__(self, max_workers=None):
        self.executor = ThreadPoolExecutor(max_workers=max_workers)
        self.tasks = queue.Queue()
        self._shutdown = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown(wait=True)

    def submit(self, fn, *args, **kwargs):
        """Отправить задачу в пул, вернуть Future."""
        if self._shutdown:
            raise RuntimeError("TaskPool already shut down")
        future = self.executor.submit(fn, *args, **kwargs)
        self.tasks.put(future)
        return future

    def wait_all(self):
        """
        Дождаться всех поставленных задач.
        Первое возникшее исключение пробрасывается после того,
        как завершились остальные.
        """
        first_error = None
        while not self.tasks.empty():
            future = self.tasks.get()
            exc = future.exception()
            if exc is not None and first_error is None:
                first_error = exc
        if first_error is not None:
            raise first_error

    def map_ordered(self, fn, items):
        """Выполнить fn для каждого элемента, вернуть результаты в исходном порядке."""
        futures = [self.submit(fn, item) for item in items]
        self.wait_all()
        return [f.result() for f in futures]

    def shutdown(self, wait=True):
        self._shutdown = True
        self.executor.shutdown(wait=wait)
