from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # XML document holding <datasources><datasource>...</datasource></datasources>
    DATASOURCE_DESCRIPTOR: str = "datasources.xml"

    # Flat db.connect.* properties file
    DATASOURCE_PROPERTIES: str = "dbutil.properties"

    DEFAULT_ENCODING: str = "utf8"

    # Command that prints one installed locale identifier per line
    LOCALE_LIST_COMMAND: str = "locale -a"

    def locale_list_command(self) -> list:
        return self.LOCALE_LIST_COMMAND.split()

    class Config:
        env_file = ".env"
        extra = "ignore" # Ignore extra fields in .env

settings = Settings()
