"""Browser pages and assets for the sender and viewer."""
from __future__ import annotations

import json
from dataclasses import dataclass

STUN_PLACEHOLDER = "__STUN_SERVER__"

INDEX_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <title>Screen Share</title>
    <link rel="stylesheet" href="/assets/style.css" />
</head>
<body>
    <div class="wrap">
        <h1>Screen Share</h1>
        <p>No login, peer to peer, local network.</p>
        <a class="btn" href="/sender">Start as Sender</a>
    </div>
</body>
</html>
"""

SENDER_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <title>Sender</title>
    <link rel="stylesheet" href="/assets/style.css" />
</head>
<body>
    <div class="wrap">
        <h2>Sender</h2>
        <button id="start" class="btn">Start Share</button>
        <div id="info" class="card" hidden></div>
        <video id="preview" autoplay playsinline muted class="preview"></video>
    </div>
    <script src="/assets/sender.js"></script>
</body>
</html>
"""

VIEWER_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <title>Viewer</title>
    <link rel="stylesheet" href="/assets/style.css" />
</head>
<body>
    <div class="wrap">
        <h2>Viewer</h2>
        <video id="view" autoplay playsinline class="viewer"></video>
    </div>
    <script src="/assets/viewer.js"></script>
</body>
</html>
"""

STYLE_CSS = """:root { font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Inter, Roboto, Arial, sans-serif; }
body { margin: 0; background: #0b0b0c; color: #f2f3f5; }
.wrap { max-width: 800px; margin: 32px auto; padding: 0 16px; }
.btn { background: #4b8bff; color: #fff; border: none; padding: 10px 16px; border-radius: 12px; font-weight: 600; cursor: pointer; text-decoration: none; }
.btn:hover { opacity: .9; }
.btn:disabled { opacity: .4; cursor: not-allowed; }
.card { background: #15161a; border: 1px solid #26282e; padding: 12px; border-radius: 12px; margin-top: 12px; }
.ok { color: #4caf50; font-weight: bold; }
.warn { color: #ff9800; }
.err { color: #f44336; font-weight: bold; }
.preview, .viewer { width: 100%; max-height: 70vh; background: #000; border-radius: 12px; margin-top: 12px; }
"""

COMMON_JS = """async function postJSON(url, data) {
  const res = await fetch(url, {method: 'POST', headers: {'Content-Type': 'application/json'}, body: JSON.stringify(data)});
  if (!res.ok) throw new Error(await res.text());
  return res.json().catch(() => ({}));
}

async function getJSON(url) {
  const res = await fetch(url);
  if (!res.ok) {
    const err = new Error(await res.text());
    err.status = res.status;
    throw err;
  }
  return res.json();
}

function waitIce(pc) {
  if (pc.iceGatheringState === 'complete') return Promise.resolve();
  return new Promise((resolve) => {
    function check() {
      if (pc.iceGatheringState === 'complete') {
        pc.removeEventListener('icegatheringstatechange', check);
        resolve();
      }
    }
    pc.addEventListener('icegatheringstatechange', check);
  });
}

async function poll(fn, intervalMs) {
  for (;;) {
    try {
      return await fn();
    } catch (err) {
      if (err.status !== 404) throw err;
    }
    await new Promise((resolve) => setTimeout(resolve, intervalMs));
  }
}

const ICE_SERVERS = [{urls: __STUN_SERVER__}];
"""

SENDER_JS = COMMON_JS + """
const startBtn = document.getElementById('start');
const preview = document.getElementById('preview');
const info = document.getElementById('info');

function showInfo(html) {
  info.hidden = false;
  info.innerHTML = html;
}

startBtn.onclick = async () => {
  try {
    startBtn.disabled = true;
    if (!navigator.mediaDevices || !navigator.mediaDevices.getDisplayMedia) {
      throw new Error('Screen capture is unavailable. Use HTTPS or localhost with a current browser.');
    }

    const serverInfo = await getJSON('/api/info');
    const baseHost = serverInfo.lanIP || location.hostname;
    const baseOrigin = location.protocol + '//' + baseHost + (location.port ? ':' + location.port : '');

    const {token} = await postJSON('/api/new', {});

    const stream = await navigator.mediaDevices.getDisplayMedia({
      video: {frameRate: {ideal: 30}, width: {ideal: 1920}, height: {ideal: 1080}},
      audio: false,
    });
    preview.srcObject = stream;

    const pc = new RTCPeerConnection({iceServers: ICE_SERVERS});
    stream.getTracks().forEach((track) => pc.addTrack(track, stream));
    pc.oniceconnectionstatechange = () => {
      const state = pc.iceConnectionState;
      if (state === 'connected' || state === 'completed') {
        info.innerHTML += '<br/><span class="ok">Viewer connected</span>';
      } else if (state === 'disconnected' || state === 'failed') {
        info.innerHTML += '<br/><span class="err">Viewer disconnected</span>';
      }
    };

    const offer = await pc.createOffer();
    await pc.setLocalDescription(offer);
    await waitIce(pc);
    await postJSON('/api/offer', {token, sdp: pc.localDescription});

    const viewerURL = baseOrigin + '/viewer?token=' + encodeURIComponent(token);
    showInfo('<b>Viewer URL:</b> <code>' + viewerURL + '</code><br/><small>Open it on the other device (same network).</small><br/><span class="warn">Waiting for viewer...</span>');

    const answer = await poll(() => getJSON('/api/answer?token=' + encodeURIComponent(token)), 1000);
    await pc.setRemoteDescription(answer);
  } catch (error) {
    startBtn.disabled = false;
    showInfo('<span class="err">Error:</span> ' + error.message);
  }
};
"""

VIEWER_JS = COMMON_JS + """
const video = document.getElementById('view');
const token = new URLSearchParams(location.search).get('token');

if (!token) {
  document.body.innerHTML = '<div class="wrap"><p>Missing token. Open the link shown on the sender page.</p></div>';
} else {
  start().catch((err) => {
    document.body.innerHTML = '<div class="wrap"><p>Error: ' + err.message + '</p></div>';
  });
}

async function start() {
  const status = document.createElement('div');
  status.className = 'card';
  status.innerHTML = '<span class="warn">Connecting to sender...</span>';
  document.querySelector('.wrap').appendChild(status);

  const pc = new RTCPeerConnection({iceServers: ICE_SERVERS});
  pc.oniceconnectionstatechange = () => {
    const state = pc.iceConnectionState;
    if (state === 'connected' || state === 'completed') {
      status.innerHTML = '<span class="ok">Connected, receiving screen</span>';
    } else if (state === 'disconnected' || state === 'failed') {
      status.innerHTML = '<span class="err">Connection lost</span>';
    }
  };
  pc.ontrack = (event) => {
    video.srcObject = event.streams[0];
    video.play().catch(() => {
      const wrap = document.createElement('div');
      wrap.className = 'wrap';
      wrap.innerHTML = '<button class="btn" id="tap">Tap to start</button>';
      document.body.appendChild(wrap);
      document.getElementById('tap').onclick = () => { video.play(); wrap.remove(); };
    });
  };

  const offer = await poll(() => getJSON('/api/offer?token=' + encodeURIComponent(token)), 1000);
  await pc.setRemoteDescription(offer);
  const answer = await pc.createAnswer();
  await pc.setLocalDescription(answer);
  await waitIce(pc);
  await postJSON('/api/answer', {token, sdp: pc.localDescription});

  status.innerHTML = '<span class="warn">Handshake complete, waiting for video...</span>';
}
"""


@dataclass(frozen=True, slots=True)
class RenderedAssets:
    sender_js: str
    viewer_js: str


def render_assets(stun_server: str) -> RenderedAssets:
    """Embed the configured STUN URL into the client scripts."""

    stun_literal = json.dumps(stun_server)
    return RenderedAssets(
        sender_js=SENDER_JS.replace(STUN_PLACEHOLDER, stun_literal),
        viewer_js=VIEWER_JS.replace(STUN_PLACEHOLDER, stun_literal),
    )
