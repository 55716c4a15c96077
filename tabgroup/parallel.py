from asyncio import gather
from asyncio import new_event_loop
from concurrent.futures import ThreadPoolExecutor


def call_parallel(functions):
    """
    Call functions in multiple threads.

    Create a pool of thread as large as the number of functions.
    Functions should accept no parameters (wrap then with partial or lambda).
    Results are returned in the order of functions.
    """
    loop = new_event_loop()
    executor = ThreadPoolExecutor(max_workers=len(functions))

    try:
        tasks = [
            loop.run_in_executor(executor, function)
            for function in functions
        ]
        result = loop.run_until_complete(gather(*tasks))

    finally:
        executor.shutdown(wait=False)
        loop.close()

    return result
