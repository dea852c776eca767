from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SheetDBSettings(BaseModel):
	"""SheetDB 相关配置。支持嵌套环境变量：
	- SQ_SHEETDB__BASE_URL
	- SQ_SHEETDB__TIMEOUT_SECONDS
	- SQ_SHEETDB__TICKER_PREFIX
	- SQ_SHEETDB__WRAPPED_FIELD
	"""

	base_url: str = Field(
		default="https://sheetdb.io/api/v1/pzq4zwvekqhqp",
		description="SheetDB API Base URL（含 API id）",
	)
	timeout_seconds: float = Field(
		default=15, ge=1, le=120, description="单次 HTTP 请求超时时间（秒）"
	)
	ticker_prefix: str = Field(
		default="$", description="按股票代码查询时 sheet 名称的前缀标记"
	)
	wrapped_field: str = Field(
		default="data", description="对象形式响应中承载行列表的字段名"
	)


class RetrySettings(BaseModel):
	"""重试配置：第 n 次失败后等待 base_delay_seconds * n² 秒。支持：
	- SQ_RETRY__MAX_TRIES
	- SQ_RETRY__BASE_DELAY_SECONDS
	"""

	max_tries: int = Field(default=3, ge=1, description="最大尝试次数（含首次）")
	base_delay_seconds: float = Field(
		default=0.25, ge=0, description="退避基础延迟（秒）"
	)


class Settings(BaseSettings):

	app_name: str = "SheetQuote API"
	debug: bool = False
	log_level: str = "INFO"

	# 嵌套配置
	sheetdb: SheetDBSettings = Field(default_factory=SheetDBSettings)
	retry: RetrySettings = Field(default_factory=RetrySettings)

	model_config = SettingsConfigDict(
		env_prefix="SQ_",
		case_sensitive=False,
		env_nested_delimiter="__",
		env_file=".env",
		env_file_encoding="utf-8",
	)


settings = Settings()
