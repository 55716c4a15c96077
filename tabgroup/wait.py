import time


class Waiter:
    def __init__(self, condition):
        self.condition = condition

    def wait(self, timeout: float) -> bool:
        expires_at = time.time() + timeout
        while time.time() < expires_at:
            if self.condition():
                return True
            time.sleep(0.050)
        return False


class ConditionTrue:
    def __init__(self, f):
        self.f = f

    def __call__(self):
        return self.f()
