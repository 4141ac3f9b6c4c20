"""
runtime helpers and predefined declaration groups

a helper is made available to a program with `#include name;`. The body
of every included helper is appended to the compiled output.

a declaration group is made available with `#declare :tag;`.
"""

helpers = {}

helpers['undef'] = """
function undef(x) {
\treturn typeof x === 'undefined';
}
"""

helpers['nada'] = """
function nada(x) {
\treturn x === null || typeof x === 'undefined';
}
"""

helpers['trycatch'] = """
function trycatch(fn, next) {
\ttry {
\t\tnext(null, fn());
\t}
\tcatch (err) {
\t\tnext(err);
\t}
}
"""

helpers['extend'] = """
function extend(parent, methods) {
\tfunction ctor(){}
\tctor.prototype = parent;
\tvar proto = new ctor(), k;
\tif (methods) {
\t\tfor (k in methods) {
\t\t\tif (methods.hasOwnProperty(k)) {
\t\t\t\tproto[k] = methods[k];
\t\t\t}
\t\t}
\t}
\treturn proto;
}
"""

helpers['each'] = """
function each() {
\tvar __ = Array.prototype.forEach;
\tif (__) {
\t\teach = function(ar, f) {
\t\t\treturn __.call(ar, f);
\t\t};
\t}
\telse {
\t\teach = function(ar, f) {
\t\t\tvar i;
\t\t\tfor (i = 0; i < ar.length; i++) {
\t\t\t\tf(ar[i], i, ar);
\t\t\t}
\t\t};
\t}
\treturn each.apply(this, arguments);
}
"""

helpers['filter'] = """
function filter() {
\tvar __ = Array.prototype.filter;
\tif (__) {
\t\tfilter = function(ar, f) {
\t\t\treturn __.call(ar, f);
\t\t};
\t}
\telse {
\t\tfilter = function(ar, f) {
\t\t\tvar i, j = 0, r = [];
\t\t\tfor (i = 0; i < ar.length; i++) {
\t\t\t\tif (f(ar[i], i, ar)) {
\t\t\t\t\tr[j++] = ar[i];
\t\t\t\t}
\t\t\t}
\t\t\treturn r;
\t\t};
\t}
\treturn filter.apply(this, arguments);
}
"""

helpers['map'] = """
function map() {
\tvar __ = Array.prototype.map;
\tif (__) {
\t\tmap = function(ar, f) {
\t\t\treturn __.call(ar, f);
\t\t};
\t}
\telse {
\t\tmap = function(ar, f) {
\t\t\tvar i, r = [];
\t\t\tfor (i = 0; i < ar.length; i++) {
\t\t\t\tr[i] = f(ar[i], i, ar);
\t\t\t}
\t\t\treturn r;
\t\t};
\t}
\treturn map.apply(this, arguments);
}
"""

helpers['keys'] = """
function keys() {
\tif (Object.keys) {
\t\tkeys = Object.keys;
\t}
\telse {
\t\tkeys = function(o) {
\t\t\tvar r = [], k;
\t\t\tfor (k in o) {
\t\t\t\tif (o.hasOwnProperty(k)) {
\t\t\t\t\tr.push(k);
\t\t\t\t}
\t\t\t}
\t\t\treturn r;
\t\t};
\t}
\treturn keys.apply(this, arguments);
}
"""

helpers['once'] = """
function once(f) {
\tvar called = false;
\treturn function() {
\t\tif (!called) {
\t\t\tcalled = true;
\t\t\treturn f.apply(this, arguments);
\t\t}
\t};
}
"""

declare_tags = {}

declare_tags[':standard'] = (
    'arguments',
    'Array',
    'Boolean',
    'Date',
    'decodeURI',
    'decodeURIComponent',
    'encodeURI',
    'encodeURIComponent',
    'Error',
    'eval',
    'EvalError',
    'Function',
    'hasOwnProperty',
    'isFinite',
    'isNaN',
    'JSON',
    'Math',
    'Number',
    'Object',
    'parseInt',
    'parseFloat',
    'RangeError',
    'ReferenceError',
    'RegExp',
    'String',
    'SyntaxError',
    'TypeError',
    'URIError',
)

declare_tags[':node'] = declare_tags[':standard'] + (
    '__filename',
    '__dirname',
    'Buffer',
    'console',
    'exports',
    'GLOBAL',
    'global',
    'module',
    'process',
    'require',
    'setTimeout',
    'clearTimeout',
    'setInterval',
    'clearInterval',
)

declare_tags[':browser'] = declare_tags[':standard'] + (
    'ArrayBuffer',
    'ArrayBufferView',
    'Audio',
    'addEventListener',
    'applicationCache',
    'blur',
    'clearInterval',
    'clearTimeout',
    'close',
    'closed',
    'DataView',
    'defaultStatus',
    'document',
    'event',
    'FileReader',
    'Float32Array',
    'Float64Array',
    'FormData',
    'focus',
    'frames',
    'getComputedStyle',
    'HTMLElement',
    'HTMLAnchorElement',
    'HTMLBaseElement',
    'HTMLBlockquoteElement',
    'HTMLBodyElement',
    'HTMLBRElement',
    'HTMLButtonElement',
    'HTMLCanvasElement',
    'HTMLDirectoryElement',
    'HTMLDivElement',
    'HTMLDListElement',
    'HTMLFieldSetElement',
    'HTMLFontElement',
    'HTMLFormElement',
    'HTMLFrameElement',
    'HTMLFrameSetElement',
    'HTMLHeadElement',
    'HTMLHeadingElement',
    'HTMLHRElement',
    'HTMLHtmlElement',
    'HTMLIFrameElement',
    'HTMLImageElement',
    'HTMLInputElement',
    'HTMLIsIndexElement',
    'HTMLLabelElement',
    'HTMLLayerElement',
    'HTMLLegendElement',
    'HTMLLIElement',
    'HTMLLinkElement',
    'HTMLMapElement',
    'HTMLMenuElement',
    'HTMLMetaElement',
    'HTMLModElement',
    'HTMLObjectElement',
    'HTMLOListElement',
    'HTMLOptGroupElement',
    'HTMLOptionElement',
    'HTMLParagraphElement',
    'HTMLParamElement',
    'HTMLPreElement',
    'HTMLQuoteElement',
    'HTMLScriptElement',
    'HTMLSelectElement',
    'HTMLStyleElement',
    'HTMLTableCaptionElement',
    'HTMLTableCellElement',
    'HTMLTableColElement',
    'HTMLTableElement',
    'HTMLTableRowElement',
    'HTMLTableSectionElement',
    'HTMLTextAreaElement',
    'HTMLTitleElement',
    'HTMLUListElement',
    'HTMLVideoElement',
    'history',
    'Int16Array',
    'Int32Array',
    'Int8Array',
    'Image',
    'length',
    'localStorage',
    'location',
    'moveBy',
    'moveTo',
    'name',
    'navigator',
    'onbeforeunload',
    'onblur',
    'onerror',
    'onfocus',
    'onload',
    'onresize',
    'onunload',
    'open',
    'openDatabase',
    'opener',
    'Option',
    'parent',
    'print',
    'removeEventListener',
    'resizeBy',
    'resizeTo',
    'screen',
    'scroll',
    'scrollBy',
    'scrollTo',
    'sessionStorage',
    'setInterval',
    'setTimeout',
    'SharedWorker',
    'status',
    'top',
    'Uint16Array',
    'Uint32Array',
    'Uint8Array',
    'WebSocket',
    'window',
    'Worker',
    'XMLHttpRequest',
    'XPathEvaluator',
    'XPathException',
    'XPathExpression',
    'XPathNamespace',
    'XPathNSResolver',
    'XPathResult',
)
