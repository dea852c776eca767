"""
通用异步重试组合子（基于 backoff）

与具体 HTTP 调用无关：传入一个无参协程函数，按给定的等待序列重试，
用尽次数后抛出最后一次的异常。
"""
import logging
from typing import Any, Awaitable, Callable, Dict, Generator, Optional, Tuple, Type, TypeVar

import backoff

T = TypeVar("T")

logger = logging.getLogger("sq.retry")


def quadratic(base: float = 0.25) -> Generator[Optional[float], Any, None]:
    """backoff 等待生成器：第 n 次失败后等待 base * n² 秒"""
    # backoff 初始化时会先 send(None) 一次
    yield
    n = 1
    while True:
        yield base * n * n
        n += 1


def _log_backoff(details: Dict[str, Any]) -> None:
    logger.info(
        f"第 {details['tries']} 次尝试失败，{details['wait']:.2f}s 后重试: {details['exception']!r}"
    )


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    *,
    max_tries: int = 3,
    base_delay: float = 0.25,
    wait_gen: Optional[Callable[..., Generator]] = None,
    exceptions: Tuple[Type[BaseException], ...] = (Exception,),
    on_attempt: Optional[Callable[[int], None]] = None,
) -> T:
    """
    执行 operation，失败时按退避策略重试

    Args:
        operation: 无参协程函数，每次尝试调用一次
        max_tries: 最大尝试次数（含首次）
        base_delay: 默认二次退避的基础延迟（秒）；传入 wait_gen 时忽略
        wait_gen: backoff 兼容的等待生成器工厂
        exceptions: 需要重试的异常类型，默认全部
        on_attempt: 每次尝试前回调，参数为当前尝试序号（从 1 开始）

    Returns:
        operation 的返回值

    Raises:
        最后一次尝试抛出的异常
    """
    if max_tries < 1:
        raise ValueError(f"max_tries 必须 >= 1: {max_tries}")

    attempt = 0

    async def _attempt() -> T:
        nonlocal attempt
        attempt += 1
        if on_attempt is not None:
            on_attempt(attempt)
        return await operation()

    if wait_gen is None:
        wait_gen, wait_kwargs = quadratic, {"base": base_delay}
    else:
        wait_kwargs = {}

    retrying = backoff.on_exception(
        wait_gen,
        exceptions,
        max_tries=max_tries,
        jitter=None,
        logger=None,
        on_backoff=_log_backoff,
        **wait_kwargs,
    )(_attempt)
    return await retrying()
