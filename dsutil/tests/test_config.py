import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from dsutil.app.core.config import Settings, settings


class TestSettings(unittest.TestCase):
    def test_defaults(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            s = Settings(_env_file=None)
        self.assertEqual(s.DATASOURCE_DESCRIPTOR, "datasources.xml")
        self.assertEqual(s.DEFAULT_ENCODING, "utf8")
        self.assertEqual(s.locale_list_command(), ["locale", "-a"])

    def test_environment_override(self):
        with mock.patch.dict(os.environ, {"DATASOURCE_DESCRIPTOR": "/etc/app/datasources.xml"}):
            s = Settings(_env_file=None)
        self.assertEqual(s.DATASOURCE_DESCRIPTOR, "/etc/app/datasources.xml")

    def test_services_fall_back_to_configured_files(self):
        from dsutil.app.services.properties_service import create_from_file
        from dsutil.app.services.xml_service import create_by_name

        with tempfile.TemporaryDirectory() as tmp:
            descriptor = Path(tmp) / "ds.xml"
            descriptor.write_text(
                "<datasources><datasource><type>master</type><name>main</name>"
                "<driver>pgsql</driver><user>app</user><host>db</host><database>app</database>"
                "</datasource></datasources>",
                encoding="utf-8",
            )
            properties = Path(tmp) / "db.properties"
            properties.write_text("db.connect.driver=pgsql\ndb.connect.user=app\n", encoding="utf-8")

            with mock.patch.object(settings, "DATASOURCE_DESCRIPTOR", str(descriptor)), \
                    mock.patch.object(settings, "DATASOURCE_PROPERTIES", str(properties)):
                self.assertEqual(create_by_name("main").connection_string(), "pgsql://app@db/app")
                self.assertEqual(create_from_file().connection_string(), "pgsql://app@/")


if __name__ == "__main__":
    unittest.main()
