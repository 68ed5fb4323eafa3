"""Test fixtures and mock data for unit tests."""

# Pinned comment with a long-form timestamped tracklist
SAMPLE_PINNED_COMMENT = """플레이리스트 ♥

00:00:00 d4vd - Here With Me
00:03:42 d4vd - Sleep Well
00:07:10 Laufey - From The Start
"""

# Description mixing boilerplate with an M:SS tracklist
SAMPLE_DESCRIPTION = """오늘도 들어주셔서 감사합니다

0:00 Until I Found You
3:15 Sleep Well - d4vd
6:40 wRoNg (feat. kehlani) -ZAYN
10:05 Daniel Caesar, H.E.R. & Giveon - Best Part
"""

# Casual comment mentioning a couple of songs
SAMPLE_CASUAL_COMMENT = """1. d4vd - Here With Me
2. Laufey - From The Start
"""

# Long regular-comment tracklist
SAMPLE_REGULAR_COMMENT = """1. d4vd - Here With Me 0:00
2. Laufey - From The Start 3:42
3. Stephen Sanchez - Until I Found You 7:10
4. Giveon - Heartbreak Anniversary 10:20
"""

SAMPLE_BOILERPLATE_COMMENT = "감사합니다 좋아요 구독 눌러주세요"

# iTunes Search API response
SAMPLE_ITUNES_RESPONSE = {
    "resultCount": 3,
    "results": [
        {
            "trackId": 1598001215,
            "trackName": "Sleep Well",
            "artistName": "d4vd",
            "collectionName": "Sleep Well - Single",
            "artworkUrl100": "https://is1-ssl.mzstatic.com/image/thumb/Music/100x100bb.jpg",
            "trackViewUrl": "https://music.apple.com/us/album/sleep-well/1598001214",
            "trackTimeMillis": 190000,
            "primaryGenreName": "Alternative",
        },
        {
            "trackId": 1598001299,
            "trackName": "Sleep Well (Sped Up)",
            "artistName": "d4vd",
        },
        {
            "trackName": "Missing Id",
            "artistName": "Nobody",
        },
    ],
}

# YouTube Data API search response
SAMPLE_YOUTUBE_SEARCH_RESPONSE = {
    "items": [
        {
            "id": {"kind": "youtube#video", "videoId": "vid001"},
            "snippet": {
                "title": "d4vd - Sleep Well (Official Music Video)",
                "channelTitle": "d4vd",
                "channelId": "UCd4vd",
                "thumbnails": {"high": {"url": "https://i.ytimg.com/vi/vid001/hqdefault.jpg"}},
            },
        },
        {
            "id": {"kind": "youtube#video", "videoId": "vid002"},
            "snippet": {
                "title": "d4vd - Sleep Well (Live at the Garden)",
                "channelTitle": "d4vd",
                "channelId": "UCd4vd",
            },
        },
        {
            "id": {"kind": "youtube#video", "videoId": "vid003"},
            "snippet": {
                "title": "Sleep Well piano cover",
                "channelTitle": "Piano Guy",
                "channelId": "UCpiano",
            },
        },
    ]
}


def comment_thread(thread_id: str, text: str, author_channel: str, video_channel: str = "UCowner"):
    """Build one commentThreads item as returned with textFormat=plainText."""
    return {
        "id": thread_id,
        "snippet": {
            "channelId": video_channel,
            "videoId": "video123",
            "topLevelComment": {
                "id": thread_id,
                "snippet": {
                    "textDisplay": text,
                    "textOriginal": text,
                    "authorChannelId": {"value": author_channel},
                },
            },
        },
    }
