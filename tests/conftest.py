from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from itpl.library import StaticLibrary
from itpl.models import Item, Location, Playlist

LIBRARY_XML = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE plist PUBLIC "-//Apple Computer//DTD PLIST 1.0//EN" "http://www.apple.com/DTDs/PropertyList-1.0.dtd">
<plist version="1.0">
<dict>
	<key>Major Version</key><integer>1</integer>
	<key>Minor Version</key><integer>1</integer>
	<key>Application Version</key><string>12.9.5.5</string>
	<key>Music Folder</key><string>file://localhost/Users/me/Music/</string>
	<key>Tracks</key>
	<dict>
		<key>101</key>
		<dict>
			<key>Track ID</key><integer>101</integer>
			<key>Name</key><string>My Song</string>
			<key>Kind</key><string>MPEG audio file</string>
			<key>Location</key><string>file://localhost/Users/me/Music/My%20Song.mp3</string>
		</dict>
		<key>102</key>
		<dict>
			<key>Track ID</key><integer>102</integer>
			<key>Name</key><string>Stream</string>
			<key>Kind</key><string>Internet audio stream</string>
			<key>Location</key><string>http://radio.example.com/live</string>
		</dict>
		<key>103</key>
		<dict>
			<key>Track ID</key><integer>103</integer>
			<key>Name</key><string>Cloud Only</string>
			<key>Kind</key><string>AAC audio file</string>
		</dict>
		<key>104</key>
		<dict>
			<key>Track ID</key><integer>104</integer>
			<key>Name</key><string>Rock &amp; Roll</string>
			<key>Kind</key><string>AAC audio file</string>
			<key>Location</key><string>file://localhost/Users/me/Music/Rock%20&amp;%20Roll%20(Live).m4a</string>
		</dict>
	</dict>
	<key>Playlists</key>
	<array>
		<dict>
			<key>Name</key><string>Library</string>
			<key>Master</key><true/>
			<key>Playlist Persistent ID</key><string>AAAA</string>
			<key>Playlist Items</key>
			<array>
				<dict><key>Track ID</key><integer>101</integer></dict>
				<dict><key>Track ID</key><integer>102</integer></dict>
				<dict><key>Track ID</key><integer>103</integer></dict>
				<dict><key>Track ID</key><integer>104</integer></dict>
			</array>
		</dict>
		<dict>
			<key>Name</key><string>Road Trip</string>
			<key>Playlist Persistent ID</key><string>BBBB</string>
			<key>Playlist Items</key>
			<array>
				<dict><key>Track ID</key><integer>104</integer></dict>
				<dict><key>Track ID</key><integer>999</integer></dict>
				<dict><key>Track ID</key><integer>101</integer></dict>
			</array>
		</dict>
		<dict>
			<key>Name</key><string>Empty</string>
			<key>Playlist Persistent ID</key><string>CCCC</string>
		</dict>
	</array>
</dict>
</plist>
"""


def file_item(title: str, path: str, kind: str | None = "MPEG audio file") -> Item:
    return Item(title=title, kind=kind, location=Location.from_path(path))


@pytest.fixture
def sample_library() -> StaticLibrary:
    return StaticLibrary(
        [
            Playlist(
                name="Road Trip",
                key="1",
                items=(
                    file_item("My Song", "/Users/me/Music/My Song.mp3"),
                    Item(title="Cloud Only", kind="AAC audio file"),
                    Item(
                        title="Stream",
                        kind="Internet audio stream",
                        location=Location.from_uri("http://radio.example.com/live"),
                    ),
                    file_item("Elsewhere", "/Volumes/Ext/Other.flac"),
                ),
            ),
            Playlist(name="Chill", key="2", items=(file_item("Calm", "/Users/me/Music/Calm.mp3"),)),
            Playlist(name="Road Trip", key="3", items=(file_item("Encore", "/Users/me/Music/Encore.mp3"),)),
        ],
        api_version="1.1",
        application_version="12.9.5.5",
    )


@pytest.fixture
def write_library_xml(tmp_path: Path) -> Callable[[str], Path]:
    def _write(content: str = LIBRARY_XML) -> Path:
        path = tmp_path / "Library.xml"
        path.write_text(content, encoding="utf-8")
        return path

    return _write
